"""
BSI Employee Reconciliation

This package contains the core modules for:

- Loading compensation, worked-days and HR description exports
- Normalizing names and French-formatted amounts
- Matching rows across sources that share no identifier
- Building one reconciled record per employee

Subpackages:
- core
- cleaning
- engines
- outputs

"""

from . import core, cleaning, engines, outputs
from .engines.reconcile_employees import reconcile_employee_records, run_reconciliation

__all__ = [
    "core",
    "cleaning",
    "engines",
    "outputs",
    "reconcile_employee_records",
    "run_reconciliation",
]
