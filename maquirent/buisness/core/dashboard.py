"""
Dashboard statistics aggregated from the entity collections.
"""

from datetime import datetime
from typing import Any, Dict, List, Optional

from maquirent.buisness.core.dates import parse_datetime, utcnow
from maquirent.buisness.core.validation import parse_number


def _count(records: List[Dict[str, Any]], field: str, value: Any) -> int:
    return sum(1 for record in records if record.get(field) == value)


def _amount(record: Dict[str, Any]) -> float:
    amount = parse_number(record.get('amount'))
    return 0.0 if amount is None else float(amount)


def _in_month(record: Dict[str, Any], today: datetime) -> bool:
    moment = parse_datetime(record.get('date'))
    return moment is not None and moment.year == today.year and moment.month == today.month


def compute_dashboard_stats(collections: Dict[str, List[Dict[str, Any]]],
                            today: Optional[datetime] = None) -> Dict[str, Any]:
    """
    Build the dashboard figures.

    Args:
        collections: Store name -> records (see CollectionStore.snapshot)
        today: Reference date for the monthly figures (default: now, UTC)

    Returns:
        dict: Counts, monthly revenue/expenses, profit margin and
        utilisation rate (both percentages)
    """
    today = today or utcnow()
    machinery = collections.get('machinery', [])
    vehicles = collections.get('vehicles', [])
    tools = collections.get('tools', [])
    alerts = collections.get('alerts', [])
    rentals = collections.get('rentals', [])
    maintenance_records = collections.get('maintenanceRecords', [])
    financial_records = collections.get('financialRecords', [])

    monthly_revenue = sum(
        _amount(record) for record in financial_records
        if record.get('type') == 'ingreso' and _in_month(record, today)
    )
    monthly_expenses = sum(
        _amount(record) for record in financial_records
        if record.get('type') == 'egreso' and _in_month(record, today)
    )
    profit_margin = ((monthly_revenue - monthly_expenses) / monthly_revenue) * 100 if monthly_revenue > 0 else 0

    total_assets = len(machinery) + len(vehicles)
    in_use_assets = _count(machinery, 'status', 'alquilado') + _count(vehicles, 'status', 'alquilado')
    utilization_rate = (in_use_assets / total_assets) * 100 if total_assets > 0 else 0

    critical_alerts = sum(
        1 for alert in alerts
        if alert.get('severity') == 'critical' and not alert.get('resolved')
    )

    return {
        'totalMachinery': len(machinery),
        'availableMachinery': _count(machinery, 'status', 'disponible'),
        'totalVehicles': len(vehicles),
        'availableVehicles': _count(vehicles, 'status', 'disponible'),
        'totalTools': len(tools),
        'availableTools': _count(tools, 'status', 'disponible'),
        'totalRentals': len(rentals),
        'activeRentals': _count(rentals, 'status', 'activo'),
        'criticalAlerts': critical_alerts,
        'pendingMaintenances': _count(maintenance_records, 'status', 'programado'),
        'monthlyRevenue': monthly_revenue,
        'monthlyExpenses': monthly_expenses,
        'profitMargin': profit_margin,
        'utilizationRate': utilization_rate,
    }
