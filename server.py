import logging
import os
from dataclasses import dataclass
from typing import Any, Optional

from flask import Flask, jsonify, request

from calculation.errors import CalculationError, ErrorKind
from calculation.evaluator import calc
from calculation.utils import format_number

logger = logging.getLogger(__name__)

CALCULATE_PATH = "/api/v1/calculate"

GENERIC_ERROR_MESSAGE = "Error calculation"

ERROR_MESSAGES: dict[ErrorKind, str] = {
    ErrorKind.INVALID_EXPRESSION: GENERIC_ERROR_MESSAGE,
    ErrorKind.DIVISION_BY_ZERO: "Division by zero",
    ErrorKind.MISMATCHED_PARENTHESES: "Mismatched parentheses",
    ErrorKind.INVALID_NUMBER: "Invalid number",
    ErrorKind.UNEXPECTED_TOKEN: "Unexpected token",
    ErrorKind.NOT_ENOUGH_VALUES: "Not enough values",
    ErrorKind.INVALID_OPERATOR: "Invalid operator",
    ErrorKind.OPERATOR_AT_END: "Operator at end",
    ErrorKind.MULTIPLE_DECIMAL_POINTS: "Multiple decimal points",
    ErrorKind.EMPTY_INPUT: "Empty input",
}


def error_message(kind: ErrorKind) -> str:
    return ERROR_MESSAGES.get(kind, GENERIC_ERROR_MESSAGE)


@dataclass
class Config:
    port: str = "8080"
    host: str = "0.0.0.0"

    @classmethod
    def from_env(cls) -> "Config":
        return cls(port=os.environ.get("PORT") or cls.port, host=os.environ.get("HOST") or cls.host)


def _read_expression(body: Any) -> Optional[str]:
    if not isinstance(body, dict):
        return None
    expression = body.get("expression")
    if not isinstance(expression, str) or not expression:
        return None
    return expression


def create_app(config: Optional[Config] = None) -> Flask:
    app = Flask(__name__)
    app.config["CALCULATOR"] = config or Config.from_env()

    @app.route(CALCULATE_PATH, methods=["POST"], provide_automatic_options=False)
    def calculate():
        expression = _read_expression(request.get_json(force=True, silent=True))
        if expression is None:
            logger.warning("Rejected request with invalid body")
            return jsonify({"error": "Invalid Body"}), 400

        try:
            result = calc(expression)
        except CalculationError as e:
            logger.info("%r calculation failed with error: %s", expression, e.kind)
            return jsonify({"error": error_message(e.kind)}), 422

        return jsonify({"result": format_number(result)}), 200

    @app.errorhandler(404)
    def not_found(_):
        return jsonify({"error": "Not Found"}), 404

    @app.errorhandler(405)
    def wrong_method(_):
        return jsonify({"error": "Wrong Method"}), 405

    return app


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(levelname)s - %(message)s")
    app = create_app()
    config: Config = app.config["CALCULATOR"]
    logger.info("Serving %s on %s:%s", CALCULATE_PATH, config.host, config.port)
    app.run(host=config.host, port=int(config.port), debug=False)


if __name__ == "__main__":
    main()
