"""Gatekeeper — допуск операций ledger.

- Access control: роли owner / fee rate manager / whitelist manager
- Transfer Gate: whitelist enforcement для transfer
"""

from .access import AccessController, Role
from .transfer_gate import TransferGate, TransferGateResult, Whitelist

__all__ = [
    "AccessController",
    "Role",
    "TransferGate",
    "TransferGateResult",
    "Whitelist",
]
