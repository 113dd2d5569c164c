"""Translation dictionary for labels and report exports (es/en)."""
from __future__ import annotations

TRANSLATIONS: dict[str, dict[str, str]] = {
    "es": {
        # Common
        "date": "Fecha",
        "total": "Total",
        "totals": "TOTALES",
        "customer": "Cliente",
        "order": "Encargo",
        "amount": "Monto",
        "generated": "Generado",
        "yes": "Sí",
        "no": "No",

        # Customer debts
        "customer_debts": "Deudas por Cliente",
        "total_due": "Total Adeudado",
        "earliest_due_date": "Próximo Vencimiento",
        "pending_orders": "Encargos Pendientes",
        "order_date": "Fecha de Compra",
        "remaining": "Restante",
        "first_due": "Primer Abono",
        "second_due": "Segundo Abono",

        # Calendar
        "payment_calendar": "Control de Abonos Pendientes",
        "events": "Abonos",
        "total_due_today": "Total a Cobrar Estimado",
        "overdue": "Vencido",
        "weekday_0": "Lun",
        "weekday_1": "Mar",
        "weekday_2": "Mié",
        "weekday_3": "Jue",
        "weekday_4": "Vie",
        "weekday_5": "Sáb",
        "weekday_6": "Dom",
        "month_1": "Enero",
        "month_2": "Febrero",
        "month_3": "Marzo",
        "month_4": "Abril",
        "month_5": "Mayo",
        "month_6": "Junio",
        "month_7": "Julio",
        "month_8": "Agosto",
        "month_9": "Septiembre",
        "month_10": "Octubre",
        "month_11": "Noviembre",
        "month_12": "Diciembre",

        # Statistics periods
        "period_week": "Última Semana",
        "period_month": "Último Mes",
        "period_year": "Último Año",

        # Finance chart
        "paid_income": "Ingresos Pagados",
        "pending_income": "Ingresos Pendientes",
        "total_invested": "Inversión Total",
        "total_withdrawn": "Retirado Total",
    },
    "en": {
        # Common
        "date": "Date",
        "total": "Total",
        "totals": "TOTALS",
        "customer": "Customer",
        "order": "Order",
        "amount": "Amount",
        "generated": "Generated",
        "yes": "Yes",
        "no": "No",

        # Customer debts
        "customer_debts": "Customer Debts",
        "total_due": "Total Due",
        "earliest_due_date": "Next Due Date",
        "pending_orders": "Pending Orders",
        "order_date": "Order Date",
        "remaining": "Remaining",
        "first_due": "First Installment",
        "second_due": "Second Installment",

        # Calendar
        "payment_calendar": "Pending Installments",
        "events": "Installments",
        "total_due_today": "Estimated Amount to Collect",
        "overdue": "Overdue",
        "weekday_0": "Mon",
        "weekday_1": "Tue",
        "weekday_2": "Wed",
        "weekday_3": "Thu",
        "weekday_4": "Fri",
        "weekday_5": "Sat",
        "weekday_6": "Sun",
        "month_1": "January",
        "month_2": "February",
        "month_3": "March",
        "month_4": "April",
        "month_5": "May",
        "month_6": "June",
        "month_7": "July",
        "month_8": "August",
        "month_9": "September",
        "month_10": "October",
        "month_11": "November",
        "month_12": "December",

        # Statistics periods
        "period_week": "Last Week",
        "period_month": "Last Month",
        "period_year": "Last Year",

        # Finance chart
        "paid_income": "Paid Income",
        "pending_income": "Pending Income",
        "total_invested": "Total Invested",
        "total_withdrawn": "Total Withdrawn",
    },
}


def t(lang: str, key: str) -> str:
    """Look up a translation key, falling back to Spanish then the key itself."""
    return TRANSLATIONS.get(lang, TRANSLATIONS["es"]).get(
        key, TRANSLATIONS["es"].get(key, key)
    )
