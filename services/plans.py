"""Subscription plans and the calendar arithmetic behind their end dates."""
import calendar

SUBSCRIPTION_PLANS = {
    "1month": {
        "id": "1month",
        "name": "1 month",
        "months": 1,
        "price": 299,
        "deliveries": 4,
        "description": "Trial period",
    },
    "3months": {
        "id": "3months",
        "name": "3 months",
        "months": 3,
        "price": 799,
        "deliveries": 4,
        "description": "Save 15%",
    },
    "1year": {
        "id": "1year",
        "name": "1 year",
        "months": 12,
        "price": 2499,
        "deliveries": 4,
        "description": "Best value, save 40%",
    },
}


def get_plan(plan_id):
    return SUBSCRIPTION_PLANS.get(plan_id)


def add_months(value, months):
    """Shift ``value`` by whole calendar months, clamping the day to month end."""
    month_index = value.month - 1 + months
    year = value.year + month_index // 12
    month = month_index % 12 + 1
    day = min(value.day, calendar.monthrange(year, month)[1])
    return value.replace(year=year, month=month, day=day)


def plan_end_date(plan_id, start):
    return add_months(start, SUBSCRIPTION_PLANS[plan_id]["months"])


def calculate_savings(plan_id):
    """Percentage saved against paying the monthly plan for the same period."""
    plan = get_plan(plan_id)
    if not plan:
        return 0
    full_price = SUBSCRIPTION_PLANS["1month"]["price"] * plan["months"]
    return round((full_price - plan["price"]) / full_price * 100)


def plan_catalog():
    return [dict(plan, savings=calculate_savings(plan_id)) for plan_id, plan in SUBSCRIPTION_PLANS.items()]
