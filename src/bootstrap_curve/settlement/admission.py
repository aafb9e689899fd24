"""Admission — допуск мутирующих вызовов к settlement.

Порядок проверок:
1. Повторный вход (reentrancy) → блокировка
2. Пауза (burn-gated emergency) → блокировка
3. Lock владельца → блокировка
4. Цели не заданы → блокировка
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class EngineStatus:
    """Флаги движка на момент вызова."""

    locked: bool
    paused: bool
    goals_configured: bool
    in_settlement: bool = False


@dataclass(frozen=True)
class AdmissionResult:
    """Результат допуска."""

    allowed: bool
    block_reason: str

    status: EngineStatus

    details: str


class AdmissionGate:
    """Stateless проверка флагов движка перед add/remove."""

    def evaluate(self, status: EngineStatus, operation: str) -> AdmissionResult:
        """Оценка допуска операции.

        Args:
            status: текущие флаги движка
            operation: имя операции (для диагностики)

        Returns:
            AdmissionResult с решением о допуске
        """
        if status.in_settlement:
            return AdmissionResult(
                allowed=False,
                block_reason="reentrant_call",
                status=status,
                details=f"{operation}: reentrant call during settlement",
            )

        if status.paused:
            return AdmissionResult(
                allowed=False,
                block_reason="paused",
                status=status,
                details=f"{operation}: engine is paused",
            )

        if status.locked:
            return AdmissionResult(
                allowed=False,
                block_reason="locked",
                status=status,
                details=f"{operation}: engine is locked by owner",
            )

        if not status.goals_configured:
            return AdmissionResult(
                allowed=False,
                block_reason="goals_not_configured",
                status=status,
                details=f"{operation}: set_goals has not been called",
            )

        return AdmissionResult(
            allowed=True,
            block_reason="",
            status=status,
            details=f"PASS: {operation}",
        )
