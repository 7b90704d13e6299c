"""Domain models - pure Python dataclasses representing business entities"""

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import List, Optional


@dataclass(frozen=True)
class PayableAccount:
    """Credit card, loan, or monthly bill with a recurring payment"""

    id: str
    account_type: str  # "credit_card" | "loan" | "monthly_payment"
    display_name: str
    balance: float
    recurring_payment_amount: float
    interest_rate: float = 0.0
    next_due_date: Optional[date] = None
    credit_limit: Optional[float] = None  # cards only


@dataclass(frozen=True)
class IncomeSource:
    """Recurring income stream"""

    id: str
    source: str
    amount: float
    frequency: str  # weekly | biweekly | monthly | annually
    next_pay_date: Optional[date] = None
    is_active: bool = True


@dataclass(frozen=True)
class ExpenseItem:
    """Expense entry, optionally recurring"""

    id: str
    description: str
    amount: float
    is_recurring: bool = False
    frequency: Optional[str] = None


@dataclass(frozen=True)
class PaymentRecord:
    """Payment made against a payable account"""

    id: str
    account_id: str
    account_type: str
    amount: float
    status: str  # pending | paid | failed | cancelled
    paid_date: Optional[datetime] = None


@dataclass(frozen=True)
class AssetHolding:
    asset_type: str
    current_value: float
    ownership_percentage: float = 100.0


@dataclass(frozen=True)
class LiabilityBalance:
    liability_type: str
    current_balance: float


@dataclass(frozen=True)
class UpcomingItem:
    """Entry of an upcoming payments or upcoming income list"""

    item_id: str
    item_type: str
    name: str
    amount: float
    due_date: Optional[date]
    days_until_due: int
    label: str


@dataclass
class OverviewMetrics:
    """Dashboard summary derived from already-fetched collections"""

    total_debt: float
    total_monthly_payments: float
    total_monthly_income: float
    total_monthly_expenses: float
    available_cash: float
    total_credit_limit: float
    total_credit_used: float
    available_credit: float
    credit_utilization: float
    total_liquidity: float


@dataclass
class NetWorthBreakdown:
    """Asset/liability category totals at a point in time"""

    cash_liquid_assets: float = 0.0
    investment_assets: float = 0.0
    real_estate_assets: float = 0.0
    vehicle_assets: float = 0.0
    personal_property_assets: float = 0.0
    business_assets: float = 0.0
    consumer_debt: float = 0.0
    vehicle_loans: float = 0.0
    real_estate_debt: float = 0.0
    education_debt: float = 0.0
    business_debt: float = 0.0
    taxes_bills: float = 0.0
    available_credit: float = 0.0

    @property
    def total_assets(self) -> float:
        return (
            self.cash_liquid_assets
            + self.investment_assets
            + self.real_estate_assets
            + self.vehicle_assets
            + self.personal_property_assets
            + self.business_assets
        )

    @property
    def total_liabilities(self) -> float:
        return (
            self.consumer_debt
            + self.vehicle_loans
            + self.real_estate_debt
            + self.education_debt
            + self.business_debt
            + self.taxes_bills
        )

    @property
    def net_worth(self) -> float:
        return self.total_assets - self.total_liabilities

    @property
    def buying_power(self) -> float:
        return self.cash_liquid_assets + self.available_credit


@dataclass(frozen=True)
class SnapshotPoint:
    """Historical net worth value used as a comparison baseline"""

    snapshot_date: date
    net_worth: float


@dataclass
class PayoffMonth:
    month: int
    payment: float
    principal: float
    interest: float
    balance: float


@dataclass
class PayoffPlan:
    """Output of the debt payoff projection"""

    months: int
    total_interest: float
    total_paid: float
    payoff_date: date
    schedule: List[PayoffMonth] = field(default_factory=list)
