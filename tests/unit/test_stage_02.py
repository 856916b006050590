"""Тесты для STAGE 2: Распределение burn и commission

Покрытие:
- Пропорциональная база при outputs на issuer
- Округление вверх (burn и commission независимо)
- Inputs от issuer (освобождены / облагаются по конфигурации)
- Denomination без определения
- STAGE 0-1 integration
"""

from decimal import Decimal
from fractions import Fraction

import pytest

from src.core.domain import Coin, DenomDefinition, MultiSend, MultiSendEntry
from src.multisend.config import CalculatorConfig
from src.multisend.errors import MultiSendError, MultiSendErrorKind
from src.multisend.stages import (
    Stage00Definitions,
    Stage01Result,
    Stage01TransferValidation,
    Stage02FeeSplit,
)


# =============================================================================
# FIXTURES
# =============================================================================


@pytest.fixture
def stage02():
    """STAGE 2 instance (default config)."""
    return Stage02FeeSplit()


def entry(address: str, **coins: int) -> MultiSendEntry:
    """Helper: создает MultiSendEntry из denom=amount."""
    return MultiSendEntry(
        address=address,
        coins=tuple(Coin(denom=denom, amount=amount) for denom, amount in coins.items()),
    )


def definition(denom: str, burn: str, commission: str, issuer: str = "issuer_account_A"):
    """Helper: создает DenomDefinition."""
    return DenomDefinition(
        denom=denom, issuer=issuer, burn_rate=Decimal(burn), commission_rate=Decimal(commission)
    )


def run_stage02(stage02, definitions, multi_send, config=None):
    """Helper: прогоняет STAGE 0-2."""
    stage00_result = Stage00Definitions().evaluate(definitions)
    stage01_result = Stage01TransferValidation(config).evaluate(stage00_result, multi_send)
    return stage02.evaluate(stage00_result, stage01_result, multi_send)


# =============================================================================
# ТЕСТЫ: пропорциональное распределение
# =============================================================================


def test_stage02_full_taxable_base(stage02):
    """PASS: issuer не получает outputs → облагается вся сумма."""
    multi_send = MultiSend(
        inputs=(entry("account1", denom1=1000),),
        outputs=(entry("account_recipient", denom1=1000),),
    )

    result = run_stage02(stage02, [definition("denom1", "0.08", "0.12")], multi_send)

    assert result.accepted is True
    share = result.shares[0]
    assert share.taxable == 1000
    assert share.burn == 80
    assert share.commission == 120
    assert share.total_debit == 1200


def test_stage02_issuer_output_exempt(stage02):
    """PASS: 500 из 1000 уходит issuer → облагается половина каждого input."""
    multi_send = MultiSend(
        inputs=(entry("account1", denom1=650), entry("account2", denom1=350)),
        outputs=(entry("account_recipient", denom1=500), entry("issuer_account_A", denom1=500)),
    )

    result = run_stage02(stage02, [definition("denom1", "0.08", "0.12")], multi_send)

    first, second = result.shares
    assert (first.address, first.taxable, first.burn, first.commission) == ("account1", 325, 26, 39)
    assert (second.address, second.taxable, second.burn, second.commission) == ("account2", 175, 14, 21)

    summary = result.summaries[0]
    assert summary.total_amount == 1000
    assert summary.taxable_base == 500
    assert summary.total_burn == 40
    assert summary.total_commission == 60
    assert summary.issuer == "issuer_account_A"


def test_stage02_rounding_each_share_up(stage02):
    """PASS: 1 * 0.01 = 0.01 → burn 1 и commission 1 (округление отдельно)."""
    multi_send = MultiSend(
        inputs=(entry("account1", denom1=1), entry("account2", denom1=1)),
        outputs=(entry("account_recipient", denom1=2),),
    )

    result = run_stage02(stage02, [definition("denom1", "0.01", "0.01")], multi_send)

    for share in result.shares:
        assert share.burn == 1
        assert share.commission == 1
        assert share.total_debit == 3

    assert result.summaries[0].total_commission == 2


def test_stage02_fractional_taxable_full_burn(stage02):
    """PASS: burn_rate = 1, taxable 187.5 → 188, 312.5 → 313."""
    multi_send = MultiSend(
        inputs=(entry("account1", denom2=300), entry("account2", denom2=500)),
        outputs=(entry("account_recipient", denom2=500), entry("issuer_account_A", denom2=300)),
    )

    result = run_stage02(stage02, [definition("denom2", "1", "0")], multi_send)

    first, second = result.shares
    assert first.taxable == Fraction(375, 2)
    assert first.burn == 188
    assert second.taxable == Fraction(625, 2)
    assert second.burn == 313
    assert result.summaries[0].total_burn == 501
    assert result.summaries[0].total_commission == 0


# =============================================================================
# ТЕСТЫ: issuer как input
# =============================================================================


@pytest.fixture
def issuer_input_multi_send():
    """Inputs 60, 90 + issuer 25; outputs 50, issuer 100, 25."""
    return MultiSend(
        inputs=(
            entry("account1", denom1=60),
            entry("account2", denom1=90),
            entry("issuer_account_A", denom1=25),
        ),
        outputs=(
            entry("account_recipient_A", denom1=50),
            entry("issuer_account_A", denom1=100),
            entry("account_recipient_B", denom1=25),
        ),
    )


def test_stage02_issuer_input_exempt(stage02, issuer_input_multi_send):
    """PASS: база = min(150, 75) = 75; input issuer не облагается."""
    result = run_stage02(stage02, [definition("denom1", "0.1", "0")], issuer_input_multi_send)

    account1, account2, issuer = result.shares
    assert result.summaries[0].taxable_base == 75
    assert account1.taxable == Fraction(60 * 75, 175)
    assert account1.burn == 3
    assert account2.burn == 4
    assert issuer.taxable == 0
    assert issuer.burn == 0
    assert result.summaries[0].total_burn == 7


def test_stage02_issuer_input_taxed_when_configured(issuer_input_multi_send):
    """PASS: exempt_issuer_inputs=False → база = NI_out, issuer облагается."""
    config = CalculatorConfig(exempt_issuer_inputs=False)
    stage02 = Stage02FeeSplit(config)

    result = run_stage02(stage02, [definition("denom1", "0.1", "0")], issuer_input_multi_send, config)

    account1, account2, issuer = result.shares
    assert result.summaries[0].taxable_base == 75
    assert (account1.burn, account2.burn) == (3, 4)
    assert issuer.burn == 2  # ceil(25 * 75 / 175 * 0.1) = ceil(1.07)


# =============================================================================
# ТЕСТЫ: без определения
# =============================================================================


def test_stage02_undefined_denom_is_fee_free(stage02):
    """PASS: обычный токен — без burn/commission."""
    multi_send = MultiSend(
        inputs=(entry("account1", plain=500),),
        outputs=(entry("account_recipient", plain=500),),
    )

    result = run_stage02(stage02, [], multi_send)

    share = result.shares[0]
    assert (share.burn, share.commission, share.total_debit) == (0, 0, 500)

    summary = result.summaries[0]
    assert summary.issuer is None
    assert summary.taxable_base == 0
    assert summary.as_dict()["total_burn"] == 0


def test_stage02_zero_rates(stage02):
    """PASS: нулевые rate → списание равно переводу."""
    multi_send = MultiSend(
        inputs=(entry("account1", denom1=350),),
        outputs=(entry("account_recipient", denom1=350),),
    )

    result = run_stage02(stage02, [definition("denom1", "0", "0")], multi_send)

    assert result.shares[0].total_debit == 350


# =============================================================================
# ТЕСТЫ: STAGE 0-1 integration
# =============================================================================


def test_stage02_forwards_stage01_rejection(stage02):
    """BLOCK: STAGE 1 отклонен → STAGE 2 не считает."""
    stage00_result = Stage00Definitions().evaluate([])
    error = MultiSendError(kind=MultiSendErrorKind.INPUT_OUTPUT_MISMATCH, message="mismatch")
    stage01_blocked = Stage01Result(accepted=False, error=error, details="mismatch")

    result = stage02.evaluate(stage00_result, stage01_blocked, MultiSend())

    assert result.accepted is False
    assert result.error is error
    assert result.shares == ()
    assert result.details.startswith("stage01_rejected")
