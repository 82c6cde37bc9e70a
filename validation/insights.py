"""
validation/insights.py

Human-readable observations attached to every validation result.

Two sources feed the list:

    1. General observations: completeness, quality tier, dataset size tier
       and field-count tier.
    2. Industry signatures: an ordered table of (predicate, generator)
       pairs evaluated against the header names. The first signature whose
       predicate holds replaces the general observations entirely.

The final list never holds more than ``MAX_INSIGHTS`` entries.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Sequence

logger = logging.getLogger(__name__)

MAX_INSIGHTS = 6


@dataclass(frozen=True)
class InsightContext:
    """
    Inputs available to insight generators.
    """

    headers: tuple[str, ...]
    total_rows: int
    empty_value_percentage: float
    data_quality_score: float


InsightPredicate = Callable[[InsightContext], bool]
InsightBuilder = Callable[[InsightContext], Sequence[str]]


@dataclass(frozen=True)
class IndustrySignature:
    name: str
    predicate: InsightPredicate
    build: InsightBuilder


# ---------------------------------------------------------------------------
# General observations, tiers are inclusive lower bounds, highest first
# ---------------------------------------------------------------------------

_QUALITY_TIERS: tuple[tuple[float, str], ...] = (
    (90.0, "Excellent data quality score - your data is well-structured and clean"),
    (70.0, "Good data quality score - minor improvements could enhance analysis accuracy"),
    (50.0, "Moderate data quality score - consider reviewing data structure and values"),
)
_QUALITY_FLOOR = "Low data quality score - significant data issues detected, review recommended"

_ROW_TIERS: tuple[tuple[int, str], ...] = (
    (1000, "Large dataset detected - sufficient for robust statistical analysis"),
    (100, "Medium dataset size - good for trend analysis and insights"),
    (10, "Small dataset size - suitable for basic analysis and validation"),
)
_ROW_FLOOR = "Very small dataset - consider collecting more data for meaningful insights"

_FIELD_TIERS: tuple[tuple[int, str], ...] = (
    (20, "Rich data structure with many fields - comprehensive analysis possible"),
    (10, "Good field coverage - balanced analysis capabilities"),
    (5, "Moderate field count - focused analysis approach"),
)
_FIELD_FLOOR = "Limited fields - consider adding more relevant columns for deeper insights"


def _tier(value: float, tiers: Sequence[tuple[float, str]], floor: str) -> str:
    for threshold, label in tiers:
        if value >= threshold:
            return label
    return floor


def general_insights(context: InsightContext) -> list[str]:
    insights: list[str] = []
    if context.empty_value_percentage > 0:
        completeness = 100 - context.empty_value_percentage
        insights.append(f"Data completeness: {completeness:.1f}% of fields have values")
    insights.append(_tier(context.data_quality_score, _QUALITY_TIERS, _QUALITY_FLOOR))
    insights.append(_tier(context.total_rows, _ROW_TIERS, _ROW_FLOOR))
    insights.append(_tier(len(context.headers), _FIELD_TIERS, _FIELD_FLOOR))
    return insights


# ---------------------------------------------------------------------------
# Industry signatures
# ---------------------------------------------------------------------------

_PHARMA_KEYWORDS: tuple[str, ...] = (
    "drug", "batch", "therapeutic", "expiry", "dosage", "prescription",
    "manufacturer", "mrp", "cost_price", "selling_price", "stock_quantity",
    "hsn_code", "gst_rate", "regulatory", "controlled_substance",
    "storage_temperature", "shelf_life", "generic_name", "strength", "packaging",
)

_HEALTHCARE_KEYWORDS: tuple[str, ...] = (
    "patient", "doctor", "diagnosis", "treatment", "admission", "discharge",
    "department", "room_type", "bill_amount", "insurance", "medical",
    "hospital", "clinic", "surgery", "medication", "symptom", "vital",
    "lab_result", "procedure", "specialty",
)

_ACCOUNTING_KEYWORDS: tuple[str, ...] = (
    "transaction", "client", "invoice", "payment", "tax", "discount", "amount",
    "branch", "service", "cheque", "bank", "pan", "gst", "ifsc", "contract",
    "prepared", "reviewed", "approved", "due_date", "payment_status",
    "payment_mode",
)

_RETAIL_KEYWORDS: tuple[str, ...] = (
    "store", "product", "category", "sku", "barcode", "channel", "inventory",
    "fulfillment", "loyalty", "brand", "variant", "collection", "promo",
    "campaign", "return", "refund", "warehouse", "shipment", "carrier",
    "sales_associate",
)

_FINANCE_KEYWORDS: tuple[str, ...] = (
    "account", "transaction", "debit", "credit", "balance", "reconciliation",
    "approval", "vendor", "gl_code", "cost_center", "profit_center",
    "department", "project", "audit", "compliance", "tax", "interest",
    "service_charge", "opening_balance", "closing_balance", "amount",
    "currency", "category", "subcategory", "description", "reference", "check",
    "invoice", "due_date", "posted_date", "cleared_date", "audit_trail", "status",
)


def _count_matching_headers(headers: Sequence[str], keywords: Sequence[str]) -> int:
    count = 0
    for header in headers:
        lowered = header.lower()
        if any(keyword in lowered for keyword in keywords):
            count += 1
    return count


def _has_at_least(keywords: Sequence[str], minimum: int) -> InsightPredicate:
    def predicate(context: InsightContext) -> bool:
        return _count_matching_headers(context.headers, keywords) >= minimum

    return predicate


def _pharma_insights(context: InsightContext) -> list[str]:
    matched = _count_matching_headers(context.headers, _PHARMA_KEYWORDS)
    return [
        f"Pharmaceutical dataset detected - {matched} product and compliance fields recognised",
        "Batch, expiry and shelf-life information being evaluated",
        "Pricing structure (cost, selling price, MRP) analysis in progress",
        "Stock levels and reorder exposure being reviewed",
        "Regulatory and tax attributes checked for completeness",
        "Pharmaceutical inventory insights generated",
    ]


def _healthcare_insights(context: InsightContext) -> list[str]:
    matched = _count_matching_headers(context.headers, _HEALTHCARE_KEYWORDS)
    return [
        f"Healthcare dataset detected - {matched} clinical and operational fields recognised",
        "Patient and provider activity patterns being evaluated",
        "Department workload and scheduling coverage analysed",
        "Billing amounts and insurance coverage reviewed",
        "Treatment and procedure distribution analysis completed",
        "Healthcare operations insights generated",
    ]


def _accounting_insights(context: InsightContext) -> list[str]:
    return [
        "Accounting dataset detected - analyzing financial transactions",
        "Client revenue and payment patterns evaluated",
        "Tax collection and discount analysis completed",
        "Branch performance and service type analysis done",
        "Payment efficiency and overdue tracking active",
        "Financial performance insights generated",
    ]


def _retail_insights(context: InsightContext) -> list[str]:
    return [
        "Retail dataset detected - analyzing store performance and product trends",
        "Product categories and inventory levels being evaluated",
        "Customer behavior and payment patterns analyzed",
        "Channel performance and store analytics in progress",
        "Sales trends and revenue analysis completed",
        "Inventory optimization recommendations generated",
    ]


def _finance_insights(context: InsightContext) -> list[str]:
    return [
        "Finance dataset detected - analyzing account performance and transactions",
        "Account balance and cash flow patterns evaluated",
        "Transaction type and category analysis completed",
        "Vendor performance and reconciliation tracking done",
        "Financial risk assessment and compliance monitoring active",
        "Financial performance insights generated",
    ]


# Evaluated in order; the first signature whose predicate holds wins.
DEFAULT_SIGNATURES: tuple[IndustrySignature, ...] = (
    IndustrySignature("pharmaceutical", _has_at_least(_PHARMA_KEYWORDS, 3), _pharma_insights),
    IndustrySignature("healthcare", _has_at_least(_HEALTHCARE_KEYWORDS, 1), _healthcare_insights),
    IndustrySignature("accounting", _has_at_least(_ACCOUNTING_KEYWORDS, 1), _accounting_insights),
    IndustrySignature("retail", _has_at_least(_RETAIL_KEYWORDS, 1), _retail_insights),
    IndustrySignature("finance", _has_at_least(_FINANCE_KEYWORDS, 2), _finance_insights),
)


class InsightGenerator:
    """
    Produces the insight list for one validation run.
    """

    def __init__(self, signatures: Sequence[IndustrySignature] | None = None) -> None:
        self._signatures = tuple(DEFAULT_SIGNATURES if signatures is None else signatures)

    def detect_signature(self, context: InsightContext) -> IndustrySignature | None:
        for signature in self._signatures:
            if signature.predicate(context):
                logger.debug(
                    "Industry signature detected name=%s headers=%d",
                    signature.name,
                    len(context.headers),
                )
                return signature
        return None

    def generate(self, context: InsightContext) -> tuple[str, ...]:
        signature = self.detect_signature(context)
        insights = list(signature.build(context)) if signature else general_insights(context)
        return tuple(insights[:MAX_INSIGHTS])
