"""
Multi-send CLI

Читает документ запроса (src/core/contracts/schema/multi_send_request.json),
выполняет расчёт и печатает документ результата
(src/core/contracts/schema/balance_changes.json).

Коды возврата:
- 0: транзакция принята
- 1: транзакция отклонена
- 2: невалидный документ запроса
"""

import argparse
import json
import logging
import sys
from typing import Any, Dict, Sequence

from pydantic import ValidationError

from src.core.contracts import MultiSendRequestValidator
from src.core.domain.request import MultiSendRequest
from src.multisend.calculator import MultiSendCalculator
from src.multisend.config import CalculatorConfig

logger = logging.getLogger(__name__)

EXIT_ACCEPTED = 0
EXIT_REJECTED = 1
EXIT_INVALID_REQUEST = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="multisend",
        description="Calculate balance changes for a multi-send transaction",
    )
    parser.add_argument(
        "request",
        type=str,
        help="Path to the request JSON file ('-' reads stdin)",
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Reject denominations without a definition",
    )
    parser.add_argument(
        "--tax-issuer-inputs",
        action="store_true",
        help="Apply burn/commission to coins sent by the issuer itself",
    )
    parser.add_argument("--indent", type=int, default=2, help="JSON output indent")
    parser.add_argument(
        "--log-level",
        type=str,
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (stderr)",
    )
    return parser


def load_request_document(path: str) -> Dict[str, Any]:
    """Чтение JSON документа из файла или stdin."""
    if path == "-":
        return json.load(sys.stdin)

    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    try:
        document = load_request_document(args.request)
    except (OSError, json.JSONDecodeError) as e:
        logger.error("Cannot read request %s: %s", args.request, e)
        return EXIT_INVALID_REQUEST

    violations = MultiSendRequestValidator().error_messages(document)
    if violations:
        logger.error(
            "Request violates multi_send_request contract (%d error(s))", len(violations)
        )
        for violation in violations:
            logger.error("  %s", violation)
        return EXIT_INVALID_REQUEST

    try:
        request = MultiSendRequest.model_validate(document)
    except ValidationError as e:
        logger.error("Request is not a valid multi-send: %s", e)
        return EXIT_INVALID_REQUEST

    config = CalculatorConfig(
        require_definitions=args.strict,
        exempt_issuer_inputs=not args.tax_issuer_inputs,
    )
    result = MultiSendCalculator(config).calculate(request)

    print(json.dumps(result.as_dict(), indent=args.indent))
    return EXIT_ACCEPTED if result.accepted else EXIT_REJECTED
