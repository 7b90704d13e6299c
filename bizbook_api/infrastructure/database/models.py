"""SQLAlchemy ORM models, one table per financial entity"""

import uuid
from sqlalchemy import Column, String, Boolean, DateTime, Date, Integer, ForeignKey, Numeric, Text
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import declarative_base, relationship
from sqlalchemy.sql import func

Base = declarative_base()

# Money columns come back as floats so the domain layer sees plain numbers
Money = Numeric(12, 2, asdecimal=False)
LargeMoney = Numeric(15, 2, asdecimal=False)
Rate = Numeric(5, 2, asdecimal=False)


class OwnedMixin:
    """Columns shared by every user-owned table"""

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    user_id = Column(Text, nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())


class UpdatableMixin:
    updated_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now())


class CreditCard(OwnedMixin, UpdatableMixin, Base):
    __tablename__ = "credit_cards"

    card_name = Column(String(255), nullable=False)
    last_four_digits = Column(String(4), nullable=True)
    credit_limit = Column(Money, nullable=True)
    balance = Column(Money, nullable=False, default=0)
    interest_rate = Column(Rate, nullable=True)
    minimum_payment = Column(Money, nullable=True)
    due_date = Column(Date, nullable=True)
    statement_balance = Column(Money, nullable=True)
    rewards_program = Column(String(100), nullable=True)
    is_active = Column(Boolean, nullable=False, default=True)


class Loan(OwnedMixin, UpdatableMixin, Base):
    __tablename__ = "loans"

    loan_name = Column(String(255), nullable=False)
    loan_type = Column(String(50), nullable=False)
    original_amount = Column(Money, nullable=True)
    current_balance = Column(Money, nullable=False)
    interest_rate = Column(Rate, nullable=True)
    monthly_payment = Column(Money, nullable=True)
    minimum_payment = Column(Money, nullable=True)
    due_date = Column(Date, nullable=True)
    lender = Column(String(255), nullable=True)
    term_length = Column(Integer, nullable=True)
    remaining_term = Column(Integer, nullable=True)
    is_active = Column(Boolean, nullable=False, default=True)


class MonthlyPayment(OwnedMixin, UpdatableMixin, Base):
    """Recurring bill (insurance, utilities, ...) tied to an account"""

    __tablename__ = "monthly_payments"

    account_id = Column(UUID(as_uuid=True), nullable=True)
    account_type = Column(String(50), nullable=False)
    payment_name = Column(String(255), nullable=False)
    amount = Column(Money, nullable=False)
    due_date = Column(Date, nullable=True)
    is_recurring = Column(Boolean, nullable=False, default=True)
    frequency = Column(String(20), nullable=False, default="monthly")
    is_active = Column(Boolean, nullable=False, default=True)


class Income(OwnedMixin, UpdatableMixin, Base):
    __tablename__ = "income"

    source = Column(String(255), nullable=False)
    income_type = Column(String(50), nullable=False)
    amount = Column(Money, nullable=False)
    frequency = Column(String(20), nullable=False)
    next_pay_date = Column(Date, nullable=True)
    is_active = Column(Boolean, nullable=False, default=True)
    taxable = Column(Boolean, nullable=False, default=True)
    category = Column(String(100), nullable=True)
    notes = Column(Text, nullable=True)


class Payment(OwnedMixin, UpdatableMixin, Base):
    """Payment against a card, loan, or monthly bill"""

    __tablename__ = "payments"

    account_id = Column(UUID(as_uuid=True), nullable=False, index=True)
    account_type = Column(String(50), nullable=False)
    amount = Column(Money, nullable=False)
    payment_date = Column(Date, nullable=False)
    payment_method = Column(String(50), nullable=True)
    confirmation_number = Column(String(100), nullable=True)
    status = Column(String(20), nullable=False, default="pending")  # pending | paid | failed | cancelled
    paid_date = Column(DateTime(timezone=True), nullable=True)
    notes = Column(Text, nullable=True)


class Expense(OwnedMixin, UpdatableMixin, Base):
    __tablename__ = "expenses"

    description = Column(String(255), nullable=False)
    amount = Column(Money, nullable=False)
    category = Column(String(100), nullable=False)
    subcategory = Column(String(100), nullable=True)
    expense_date = Column(Date, nullable=False)
    payment_method = Column(String(50), nullable=True)
    merchant = Column(String(255), nullable=True)
    is_recurring = Column(Boolean, nullable=False, default=False)
    frequency = Column(String(20), nullable=True)
    tax_deductible = Column(Boolean, nullable=False, default=False)
    notes = Column(Text, nullable=True)


class Asset(OwnedMixin, UpdatableMixin, Base):
    __tablename__ = "assets"

    asset_name = Column(String(255), nullable=False)
    asset_type = Column(String(50), nullable=False)
    current_value = Column(LargeMoney, nullable=False)
    purchase_price = Column(LargeMoney, nullable=True)
    purchase_date = Column(Date, nullable=True)
    ownership_percentage = Column(Rate, nullable=False, default=100)
    is_liquid = Column(Boolean, nullable=False, default=False)
    institution = Column(String(255), nullable=True)
    notes = Column(Text, nullable=True)


class Liability(OwnedMixin, UpdatableMixin, Base):
    __tablename__ = "liabilities"

    liability_name = Column(String(255), nullable=False)
    liability_type = Column(String(50), nullable=False)
    current_balance = Column(LargeMoney, nullable=False)
    original_amount = Column(LargeMoney, nullable=True)
    interest_rate = Column(Rate, nullable=True)
    minimum_payment = Column(Money, nullable=True)
    due_date = Column(Date, nullable=True)
    lender = Column(String(255), nullable=True)
    is_secured = Column(Boolean, nullable=False, default=False)
    notes = Column(Text, nullable=True)


class SavingsGoal(OwnedMixin, UpdatableMixin, Base):
    __tablename__ = "savings_goals"

    goal_name = Column(String(255), nullable=False)
    target_amount = Column(Money, nullable=False)
    current_amount = Column(Money, nullable=False, default=0)
    monthly_contribution = Column(Money, nullable=False, default=0)
    target_date = Column(Date, nullable=True)
    priority = Column(String(20), nullable=False, default="medium")  # low | medium | high
    category = Column(String(100), nullable=True)
    is_active = Column(Boolean, nullable=False, default=True)
    description = Column(Text, nullable=True)


class Budget(OwnedMixin, UpdatableMixin, Base):
    __tablename__ = "budgets"

    category = Column(String(100), nullable=False)
    budget_amount = Column(Money, nullable=False)
    current_spent = Column(Money, nullable=False, default=0)
    period = Column(String(20), nullable=False, default="monthly")
    start_date = Column(Date, nullable=True)
    end_date = Column(Date, nullable=True)
    alert_threshold = Column(Rate, nullable=False, default=80)  # percent of budget_amount
    is_active = Column(Boolean, nullable=False, default=True)
    rollover = Column(Boolean, nullable=False, default=False)


class Investment(OwnedMixin, UpdatableMixin, Base):
    """Investment account (401k, IRA, brokerage, ...)"""

    __tablename__ = "investments"

    account_name = Column(String(255), nullable=False)
    account_type = Column(String(50), nullable=False)
    institution = Column(String(255), nullable=True)
    current_value = Column(LargeMoney, nullable=False)
    contribution_amount = Column(Money, nullable=False, default=0)
    contribution_frequency = Column(String(20), nullable=False, default="monthly")
    employer_match = Column(Rate, nullable=False, default=0)
    vesting_schedule = Column(String(255), nullable=True)
    risk_level = Column(String(20), nullable=False, default="moderate")
    expected_return = Column(Rate, nullable=False, default=7)
    maturity_date = Column(Date, nullable=True)
    auto_rebalance = Column(Boolean, nullable=False, default=False)


class NetWorthSnapshot(OwnedMixin, Base):
    """Append-only point-in-time net worth record"""

    __tablename__ = "net_worth_snapshots"

    snapshot_date = Column(Date, nullable=False, index=True)
    total_assets = Column(LargeMoney, nullable=False)
    total_liabilities = Column(LargeMoney, nullable=False)
    net_worth = Column(LargeMoney, nullable=False)
    cash_liquid_assets = Column(LargeMoney, nullable=False, default=0)
    investment_assets = Column(LargeMoney, nullable=False, default=0)
    real_estate_assets = Column(LargeMoney, nullable=False, default=0)
    vehicle_assets = Column(LargeMoney, nullable=False, default=0)
    personal_property_assets = Column(LargeMoney, nullable=False, default=0)
    business_assets = Column(LargeMoney, nullable=False, default=0)
    consumer_debt = Column(LargeMoney, nullable=False, default=0)
    vehicle_loans = Column(LargeMoney, nullable=False, default=0)
    real_estate_debt = Column(LargeMoney, nullable=False, default=0)
    education_debt = Column(LargeMoney, nullable=False, default=0)
    business_debt = Column(LargeMoney, nullable=False, default=0)
    taxes_bills = Column(LargeMoney, nullable=False, default=0)
    month_over_month_change = Column(Numeric(9, 2, asdecimal=False), nullable=True)
    year_over_year_change = Column(Numeric(9, 2, asdecimal=False), nullable=True)


class BusinessProfile(OwnedMixin, UpdatableMixin, Base):
    __tablename__ = "business_profiles"

    business_name = Column(String(255), nullable=False)
    business_type = Column(String(100), nullable=True)
    ein = Column(String(20), nullable=True)
    address = Column(Text, nullable=True)
    city = Column(String(100), nullable=True)
    state = Column(String(50), nullable=True)
    zip_code = Column(String(20), nullable=True)
    country = Column(String(50), nullable=False, default="US")
    phone = Column(String(20), nullable=True)
    email = Column(String(255), nullable=True)
    is_active = Column(Boolean, nullable=False, default=True)


class BusinessCreditCard(OwnedMixin, UpdatableMixin, Base):
    __tablename__ = "business_credit_cards"

    business_profile_id = Column(UUID(as_uuid=True), ForeignKey("business_profiles.id"), nullable=True)
    card_name = Column(String(255), nullable=False)
    last_four_digits = Column(String(4), nullable=True)
    credit_limit = Column(Money, nullable=True)
    balance = Column(Money, nullable=False, default=0)
    interest_rate = Column(Rate, nullable=True)
    minimum_payment = Column(Money, nullable=True)
    due_date = Column(Date, nullable=True)
    is_active = Column(Boolean, nullable=False, default=True)


class BusinessLoan(OwnedMixin, UpdatableMixin, Base):
    __tablename__ = "business_loans"

    business_profile_id = Column(UUID(as_uuid=True), ForeignKey("business_profiles.id"), nullable=True)
    loan_name = Column(String(255), nullable=False)
    loan_type = Column(String(50), nullable=False)
    current_balance = Column(Money, nullable=False)
    interest_rate = Column(Rate, nullable=True)
    monthly_payment = Column(Money, nullable=True)
    due_date = Column(Date, nullable=True)
    lender = Column(String(255), nullable=True)
    purpose = Column(String(255), nullable=True)
    is_active = Column(Boolean, nullable=False, default=True)


class BusinessRevenue(OwnedMixin, UpdatableMixin, Base):
    __tablename__ = "business_revenue"

    business_profile_id = Column(UUID(as_uuid=True), ForeignKey("business_profiles.id"), nullable=True)
    source = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    amount = Column(Money, nullable=False)
    revenue_date = Column(Date, nullable=False)
    category = Column(String(100), nullable=True)
    invoice_number = Column(String(100), nullable=True)
    is_recurring = Column(Boolean, nullable=False, default=False)
    frequency = Column(String(20), nullable=True)


class BusinessExpense(OwnedMixin, UpdatableMixin, Base):
    __tablename__ = "business_expenses"

    business_profile_id = Column(UUID(as_uuid=True), ForeignKey("business_profiles.id"), nullable=True)
    description = Column(String(255), nullable=False)
    amount = Column(Money, nullable=False)
    category = Column(String(100), nullable=False)
    expense_date = Column(Date, nullable=False)
    vendor_id = Column(UUID(as_uuid=True), ForeignKey("vendors.id"), nullable=True)
    is_recurring = Column(Boolean, nullable=False, default=False)
    frequency = Column(String(20), nullable=True)
    tax_deductible = Column(Boolean, nullable=False, default=True)


class Vendor(OwnedMixin, UpdatableMixin, Base):
    __tablename__ = "vendors"

    company_name = Column(String(255), nullable=False)
    contact_person = Column(String(255), nullable=True)
    email = Column(String(255), nullable=True)
    phone = Column(String(20), nullable=True)
    address = Column(Text, nullable=True)
    vendor_type = Column(String(100), nullable=True)
    payment_terms = Column(String(100), nullable=True)
    tax_id = Column(String(20), nullable=True)
    is_active = Column(Boolean, nullable=False, default=True)
    notes = Column(Text, nullable=True)


class PurchaseOrder(OwnedMixin, UpdatableMixin, Base):
    __tablename__ = "purchase_orders"

    business_profile_id = Column(UUID(as_uuid=True), ForeignKey("business_profiles.id"), nullable=True)
    vendor_id = Column(UUID(as_uuid=True), ForeignKey("vendors.id"), nullable=True)
    po_number = Column(String(100), nullable=False, unique=True)
    status = Column(String(50), nullable=False, default="pending")
    order_date = Column(Date, nullable=True)
    expected_delivery = Column(Date, nullable=True)
    subtotal = Column(Money, nullable=False, default=0)
    tax_amount = Column(Money, nullable=False, default=0)
    shipping_amount = Column(Money, nullable=False, default=0)
    total_amount = Column(Money, nullable=False, default=0)
    terms = Column(String(100), nullable=True)
    notes = Column(Text, nullable=True)

    items = relationship("PurchaseOrderItem", back_populates="purchase_order", cascade="all, delete-orphan")


class PurchaseOrderItem(Base):
    """Line item, owned through its purchase order"""

    __tablename__ = "purchase_order_items"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    purchase_order_id = Column(
        UUID(as_uuid=True), ForeignKey("purchase_orders.id", ondelete="CASCADE"), nullable=False
    )
    line_number = Column(Integer, nullable=False)
    description = Column(Text, nullable=False)
    quantity = Column(Money, nullable=False)
    unit_price = Column(Money, nullable=False)
    total_price = Column(Money, nullable=False)
    unit_of_measure = Column(String(20), nullable=False, default="each")
    part_number = Column(String(100), nullable=True)
    status = Column(String(50), nullable=False, default="pending")
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())

    purchase_order = relationship("PurchaseOrder", back_populates="items")
