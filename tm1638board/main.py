import logging
import sys
import time

from .config import load_config
from .gpio import GpioController
from .tm1638 import TM1638

DEFAULT_TEXT = "HELLO.42"


def main(argv=None):
    argv = sys.argv[1:] if argv is None else argv
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    config = load_config()

    gpio = GpioController(config["pin_mode"])
    display = TM1638(gpio, config["dio"], config["clk"], config["stb"],
                     edge_delay=config["edge_delay"])
    try:
        display.enable(config["intensity"])
        display.set_text(argv[0] if argv else DEFAULT_TEXT)
        print("Press the board keys (Ctrl+C to stop)")
        last = None
        while True:
            keys = display.get_buttons()
            if keys != last:
                print(f"keys: {keys:#010x}")
                last = keys
            time.sleep(config["poll_interval"])
    except KeyboardInterrupt:
        print("\nclean GPIO")
    finally:
        display.close()
        gpio.cleanup()
    return 0


if __name__ == "__main__":
    sys.exit(main())
