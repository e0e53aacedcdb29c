import sys
import logging

from glyphcast.game import Game


def main():
    logging.basicConfig(
        level=logging.INFO, format="%(asctime)s %(name)s %(levelname)s: %(message)s"
    )
    # Optional path to a text map ('#' wall, '.' floor)
    map_path = sys.argv[1] if len(sys.argv) > 1 else None
    Game(map_path=map_path).run()


if __name__ == "__main__":
    main()
