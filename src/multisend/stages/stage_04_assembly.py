"""STAGE 4: Сборка результата

Преобразует delta из STAGE 3 в упорядоченный список BalanceChange:
- порядок аккаунтов сохраняется (outputs, issuer, inputs)
- нулевые delta отбрасываются
- аккаунт с нулевым итогом по всем denomination не попадает в результат
"""

from dataclasses import dataclass

from src.core.domain.balance import BalanceChange
from src.multisend.errors import MultiSendError
from src.multisend.stages.stage_03_aggregation import Stage03Result


# =============================================================================
# RESULT
# =============================================================================


@dataclass(frozen=True)
class Stage04Result:
    """Результат STAGE 4."""

    accepted: bool
    error: MultiSendError | None
    changes: tuple[BalanceChange, ...] = ()
    details: str = ""


# =============================================================================
# STAGE 4
# =============================================================================


class Stage04Assembly:
    """STAGE 4: Сборка упорядоченного списка изменений."""

    def evaluate(self, stage03_result: Stage03Result) -> Stage04Result:
        """Сборка результата.

        Args:
            stage03_result: результат STAGE 3 (delta по аккаунтам)

        Returns:
            Stage04Result со списком BalanceChange
        """
        if not stage03_result.accepted:
            return Stage04Result(
                accepted=False,
                error=stage03_result.error,
                details=f"stage03_rejected: {stage03_result.details}",
            )

        changes = []
        for address, coins in stage03_result.deltas.items():
            non_zero = {denom: delta for denom, delta in coins.items() if delta != 0}
            if non_zero:
                changes.append(BalanceChange(address=address, coins=non_zero))

        return Stage04Result(
            accepted=True,
            error=None,
            changes=tuple(changes),
            details=f"PASS: {len(changes)} balance change(s)",
        )
