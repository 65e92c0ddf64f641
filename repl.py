import logging
from typing import Callable

from calculation.errors import CalculationError
from calculation.evaluator import calc
from calculation.utils import format_number

logger = logging.getLogger(__name__)

EXIT_COMMAND = "exit"


def run(read_line: Callable[[str], str] = input) -> None:
    while True:
        try:
            code = read_line("> ").strip()
        except EOFError:
            logger.info("input closed, exiting")
            return

        if code == EXIT_COMMAND:
            logger.info("application was successfully closed")
            return

        try:
            result = calc(code)
        except CalculationError as e:
            logger.error("%r calculation failed with error:\n%s", code, e)
            continue

        print(f"{code} = {format_number(result)}")


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(levelname)s - %(message)s")
    run()


if __name__ == "__main__":
    main()
