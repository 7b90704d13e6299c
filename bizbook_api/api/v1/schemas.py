"""Pydantic schemas for API request/response validation"""

import uuid
from datetime import date, datetime
from typing import Annotated, Generic, List, Literal, Optional, Type, TypeVar

from pydantic import BaseModel, ConfigDict, Field, create_model, field_validator, model_validator

DataT = TypeVar("DataT")

Frequency = Literal["weekly", "biweekly", "monthly", "annually"]
AccountType = Literal["credit_card", "loan", "monthly_payment"]
PaymentStatus = Literal["pending", "paid", "failed", "cancelled"]

Name = Annotated[str, Field(min_length=1, max_length=255)]
Amount = Annotated[float, Field(ge=0)]
Percent = Annotated[float, Field(ge=0, le=100)]


def partial_model(model: Type[BaseModel], name: str) -> Type[BaseModel]:
    """
    Derive a PATCH schema: every field optional and defaulting to None,
    field constraints kept for values that are supplied.
    """
    fields = {}
    for field_name, info in model.model_fields.items():
        annotation = info.annotation
        if info.metadata:
            annotation = Annotated[(annotation, *info.metadata)]
        fields[field_name] = (Optional[annotation], None)
    return create_model(name, **fields)


class Envelope(BaseModel, Generic[DataT]):
    """Standard success response"""

    success: bool = True
    data: DataT
    total: Optional[int] = None
    message: Optional[str] = None


class RecordRead(BaseModel):
    """Columns every stored record exposes"""

    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    user_id: str
    created_at: datetime


# ---------------------------------------------------------------------------
# Personal accounts
# ---------------------------------------------------------------------------


class CreditCardCreate(BaseModel):
    card_name: Name
    last_four_digits: Optional[str] = Field(None, pattern=r"^\d{4}$")
    credit_limit: Optional[Amount] = None
    balance: Amount = 0
    interest_rate: Optional[Amount] = None
    minimum_payment: Optional[Amount] = None
    due_date: Optional[date] = None
    statement_balance: Optional[Amount] = None
    rewards_program: Optional[str] = Field(None, max_length=100)
    is_active: bool = True


class CreditCardRead(CreditCardCreate, RecordRead):
    pass


class LoanCreate(BaseModel):
    loan_name: Name
    loan_type: str = Field(..., min_length=1, max_length=50)
    original_amount: Optional[Amount] = None
    current_balance: Amount
    interest_rate: Optional[Amount] = None
    monthly_payment: Optional[Amount] = None
    minimum_payment: Optional[Amount] = None
    due_date: Optional[date] = None
    lender: Optional[str] = Field(None, max_length=255)
    term_length: Optional[int] = Field(None, ge=0)
    remaining_term: Optional[int] = Field(None, ge=0)
    is_active: bool = True


class LoanRead(LoanCreate, RecordRead):
    pass


class MonthlyPaymentCreate(BaseModel):
    """Recurring bill such as insurance or utilities"""

    account_id: Optional[uuid.UUID] = None
    account_type: str = Field(..., min_length=1, max_length=50)
    payment_name: Name
    amount: Amount
    due_date: Optional[date] = None
    is_recurring: bool = True
    frequency: Frequency = "monthly"
    is_active: bool = True


class MonthlyPaymentRead(MonthlyPaymentCreate, RecordRead):
    pass


class IncomeCreate(BaseModel):
    source: Name
    income_type: str = Field(..., min_length=1, max_length=50)
    amount: Amount
    frequency: Frequency
    next_pay_date: Optional[date] = None
    is_active: bool = True
    taxable: bool = True
    category: Optional[str] = Field(None, max_length=100)
    notes: Optional[str] = None


class IncomeRead(IncomeCreate, RecordRead):
    pass


class ExpenseCreate(BaseModel):
    description: Name
    amount: Amount
    category: str = Field(..., min_length=1, max_length=100)
    subcategory: Optional[str] = Field(None, max_length=100)
    expense_date: date
    payment_method: Optional[str] = Field(None, max_length=50)
    merchant: Optional[str] = Field(None, max_length=255)
    is_recurring: bool = False
    frequency: Optional[Frequency] = None
    tax_deductible: bool = False
    notes: Optional[str] = None


class ExpenseRead(ExpenseCreate, RecordRead):
    pass


class AssetCreate(BaseModel):
    asset_name: Name
    asset_type: str = Field(..., min_length=1, max_length=50)
    current_value: Amount
    purchase_price: Optional[Amount] = None
    purchase_date: Optional[date] = None
    ownership_percentage: Percent = 100
    is_liquid: bool = False
    institution: Optional[str] = Field(None, max_length=255)
    notes: Optional[str] = None


class AssetRead(AssetCreate, RecordRead):
    pass


class LiabilityCreate(BaseModel):
    liability_name: Name
    liability_type: str = Field(..., min_length=1, max_length=50)
    current_balance: Amount
    original_amount: Optional[Amount] = None
    interest_rate: Optional[Amount] = None
    minimum_payment: Optional[Amount] = None
    due_date: Optional[date] = None
    lender: Optional[str] = Field(None, max_length=255)
    is_secured: bool = False
    notes: Optional[str] = None


class LiabilityRead(LiabilityCreate, RecordRead):
    pass


class SavingsGoalCreate(BaseModel):
    goal_name: Name
    target_amount: Amount
    current_amount: Amount = 0
    monthly_contribution: Amount = 0
    target_date: Optional[date] = None
    priority: Literal["low", "medium", "high"] = "medium"
    category: Optional[str] = Field(None, max_length=100)
    is_active: bool = True
    description: Optional[str] = None


class SavingsGoalRead(SavingsGoalCreate, RecordRead):
    pass


class BudgetCreate(BaseModel):
    category: str = Field(..., min_length=1, max_length=100)
    budget_amount: Amount
    current_spent: Amount = 0
    period: Frequency = "monthly"
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    alert_threshold: Percent = 80
    is_active: bool = True
    rollover: bool = False


class BudgetRead(BudgetCreate, RecordRead):
    pass


class InvestmentCreate(BaseModel):
    account_name: Name
    account_type: str = Field(..., min_length=1, max_length=50)
    institution: Optional[str] = Field(None, max_length=255)
    current_value: Amount
    contribution_amount: Amount = 0
    contribution_frequency: Frequency = "monthly"
    employer_match: Percent = 0
    vesting_schedule: Optional[str] = Field(None, max_length=255)
    risk_level: str = Field("moderate", max_length=20)
    expected_return: float = Field(7, ge=-100, le=100)
    maturity_date: Optional[date] = None
    auto_rebalance: bool = False


class InvestmentRead(InvestmentCreate, RecordRead):
    pass


# ---------------------------------------------------------------------------
# Payments
# ---------------------------------------------------------------------------


class _AccountReference(BaseModel):
    account_id: uuid.UUID
    account_type: AccountType

    @field_validator("account_type", mode="before")
    @classmethod
    def normalize_account_type(cls, value):
        # Clients send both "credit-card" and "credit_card"
        if isinstance(value, str):
            return value.strip().lower().replace("-", "_")
        return value


class PaymentCreate(_AccountReference):
    amount: float = Field(..., gt=0)
    payment_date: Optional[date] = None
    payment_method: Optional[str] = Field(None, max_length=50)
    confirmation_number: Optional[str] = Field(None, max_length=100)
    notes: Optional[str] = None


class PaymentRead(RecordRead):
    account_id: uuid.UUID
    account_type: str
    amount: float
    payment_date: date
    payment_method: Optional[str] = None
    confirmation_number: Optional[str] = None
    status: str
    paid_date: Optional[datetime] = None
    notes: Optional[str] = None


class MarkPaidRequest(BaseModel):
    """Body for PATCH /v1/payments/{id}/mark-paid"""

    confirmation_number: Optional[str] = Field(None, max_length=100)
    notes: Optional[str] = None


class MarkAsPaidRequest(_AccountReference):
    """Body for POST /v1/payments/mark-as-paid"""

    amount: float = Field(..., gt=0)
    payment_method: Optional[str] = Field(None, max_length=50)
    confirmation_number: Optional[str] = Field(None, max_length=100)
    notes: Optional[str] = None


# ---------------------------------------------------------------------------
# Business
# ---------------------------------------------------------------------------


class BusinessProfileCreate(BaseModel):
    business_name: Name
    business_type: Optional[str] = Field(None, max_length=100)
    ein: Optional[str] = Field(None, max_length=20)
    address: Optional[str] = None
    city: Optional[str] = Field(None, max_length=100)
    state: Optional[str] = Field(None, max_length=50)
    zip_code: Optional[str] = Field(None, max_length=20)
    country: str = Field("US", max_length=50)
    phone: Optional[str] = Field(None, max_length=20)
    email: Optional[str] = Field(None, max_length=255)
    is_active: bool = True


class BusinessProfileRead(BusinessProfileCreate, RecordRead):
    pass


class BusinessCreditCardCreate(BaseModel):
    business_profile_id: Optional[uuid.UUID] = None
    card_name: Name
    last_four_digits: Optional[str] = Field(None, pattern=r"^\d{4}$")
    credit_limit: Optional[Amount] = None
    balance: Amount = 0
    interest_rate: Optional[Amount] = None
    minimum_payment: Optional[Amount] = None
    due_date: Optional[date] = None
    is_active: bool = True


class BusinessCreditCardRead(BusinessCreditCardCreate, RecordRead):
    pass


class BusinessLoanCreate(BaseModel):
    business_profile_id: Optional[uuid.UUID] = None
    loan_name: Name
    loan_type: str = Field(..., min_length=1, max_length=50)
    current_balance: Amount
    interest_rate: Optional[Amount] = None
    monthly_payment: Optional[Amount] = None
    due_date: Optional[date] = None
    lender: Optional[str] = Field(None, max_length=255)
    purpose: Optional[str] = Field(None, max_length=255)
    is_active: bool = True


class BusinessLoanRead(BusinessLoanCreate, RecordRead):
    pass


class BusinessRevenueCreate(BaseModel):
    business_profile_id: Optional[uuid.UUID] = None
    source: Name
    description: Optional[str] = None
    amount: Amount
    revenue_date: date
    category: Optional[str] = Field(None, max_length=100)
    invoice_number: Optional[str] = Field(None, max_length=100)
    is_recurring: bool = False
    frequency: Optional[Frequency] = None


class BusinessRevenueRead(BusinessRevenueCreate, RecordRead):
    pass


class BusinessExpenseCreate(BaseModel):
    business_profile_id: Optional[uuid.UUID] = None
    description: Name
    amount: Amount
    category: str = Field(..., min_length=1, max_length=100)
    expense_date: date
    vendor_id: Optional[uuid.UUID] = None
    is_recurring: bool = False
    frequency: Optional[Frequency] = None
    tax_deductible: bool = True


class BusinessExpenseRead(BusinessExpenseCreate, RecordRead):
    pass


class VendorCreate(BaseModel):
    company_name: Name
    contact_person: Optional[str] = Field(None, max_length=255)
    email: Optional[str] = Field(None, max_length=255)
    phone: Optional[str] = Field(None, max_length=20)
    address: Optional[str] = None
    vendor_type: Optional[str] = Field(None, max_length=100)
    payment_terms: Optional[str] = Field(None, max_length=100)
    tax_id: Optional[str] = Field(None, max_length=20)
    is_active: bool = True
    notes: Optional[str] = None


class VendorRead(VendorCreate, RecordRead):
    pass


class PurchaseOrderCreate(BaseModel):
    business_profile_id: Optional[uuid.UUID] = None
    vendor_id: Optional[uuid.UUID] = None
    po_number: str = Field(..., min_length=1, max_length=100)
    status: str = Field("pending", max_length=50)
    order_date: Optional[date] = None
    expected_delivery: Optional[date] = None
    subtotal: Amount = 0
    tax_amount: Amount = 0
    shipping_amount: Amount = 0
    total_amount: Amount = 0
    terms: Optional[str] = Field(None, max_length=100)
    notes: Optional[str] = None


class PurchaseOrderRead(PurchaseOrderCreate, RecordRead):
    pass


class PurchaseOrderItemCreate(BaseModel):
    purchase_order_id: uuid.UUID
    line_number: int = Field(..., ge=1)
    description: str = Field(..., min_length=1)
    quantity: float = Field(..., gt=0)
    unit_price: Amount
    total_price: Optional[Amount] = None
    unit_of_measure: str = Field("each", max_length=20)
    part_number: Optional[str] = Field(None, max_length=100)
    status: str = Field("pending", max_length=50)

    @model_validator(mode="after")
    def fill_total_price(self):
        if self.total_price is None:
            self.total_price = round(self.quantity * self.unit_price, 2)
        return self


class PurchaseOrderItemRead(PurchaseOrderItemCreate):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    created_at: datetime


# ---------------------------------------------------------------------------
# Dashboard and calculations
# ---------------------------------------------------------------------------


class UpcomingItemSchema(BaseModel):
    """Single row of the upcoming payments / income list"""

    model_config = ConfigDict(from_attributes=True)

    item_id: str
    item_type: str
    name: str
    amount: float
    due_date: Optional[date] = None
    days_until_due: int
    label: str


class UpcomingList(BaseModel):
    window: str
    total_amount: float
    items: List[UpcomingItemSchema]


class OverviewSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

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


class NetWorthCalculation(BaseModel):
    """Current net worth computed from assets/liabilities, not persisted"""

    total_assets: float
    total_liabilities: float
    net_worth: float
    buying_power: float
    liquid_assets: float
    available_credit: float
    cash_liquid_assets: float
    investment_assets: float
    real_estate_assets: float
    vehicle_assets: float
    personal_property_assets: float
    business_assets: float
    consumer_debt: float
    vehicle_loans: float
    real_estate_debt: float
    education_debt: float
    business_debt: float
    taxes_bills: float


class SnapshotCreateRequest(BaseModel):
    snapshot_date: Optional[date] = None


class NetWorthSnapshotRead(RecordRead):
    snapshot_date: date
    total_assets: float
    total_liabilities: float
    net_worth: float
    cash_liquid_assets: float
    investment_assets: float
    real_estate_assets: float
    vehicle_assets: float
    personal_property_assets: float
    business_assets: float
    consumer_debt: float
    vehicle_loans: float
    real_estate_debt: float
    education_debt: float
    business_debt: float
    taxes_bills: float
    month_over_month_change: Optional[float] = None
    year_over_year_change: Optional[float] = None


class PayoffRequest(BaseModel):
    balance: float = Field(..., gt=0)
    interest_rate: float = Field(..., ge=0)
    monthly_payment: float = Field(..., gt=0)
    extra_payment: float = Field(0, ge=0)


class PayoffMonthSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    month: int
    payment: float
    principal: float
    interest: float
    balance: float


class PayoffResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    months: int
    total_interest: float
    total_paid: float
    payoff_date: date
    schedule: List[PayoffMonthSchema]


class IdentitySchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    user_id: str
    email: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None
