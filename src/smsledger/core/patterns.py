"""Static pattern tables (core domain).

Every table here is compiled once at import and never mutated. Order is part
of the contract: amount and merchant sets are first-match-wins, so precise
rules must sit above permissive ones. Debit/credit sets are scored, so their
order does not matter.

Rupee amounts are written with ``(?:Rs\\.?|INR|₹)`` throughout; the tables
target Indian bank, wallet, and telecom senders.
"""

from __future__ import annotations

import re

from smsledger.core.rules_engine import build_rule_set

_CUR = r"(?:Rs\.?|INR|₹)"
_NUM = r"([0-9][0-9,]*(?:\.[0-9]{1,2})?)"

# ==================== Informational (veto) ====================
# Messages that mention money but do not record a completed movement.

INFORMATIONAL_RULES = build_rule_set(
    "informational",
    [
        # Plan expiry/validity (Jio, Airtel, Vi, BSNL)
        ("expiry", r"(?:has|have|will|is)\s+expired?"),
        ("expiry", r"expir(?:es|ing|ed)\s+(?:on|today|soon|at)"),
        ("expiry", r"valid(?:ity)?\s+(?:till|until|expires|ends)"),
        ("expiry", r"plan\s+(?:has\s+)?expired"),
        ("expiry", r"will\s+expire\s+on"),
        ("expiry", r"pack\s+(?:expired|expiring)"),
        ("expiry", r"recharge\s+before"),
        # Status of a non-financial action
        ("status", r"status\s*:"),
        ("status", r"(?:is|has\s+been)\s+(?:activated|registered|linked|blocked|unblocked)"),
        ("status", r"successfully\s+(?:activated|registered|linked|updated|submitted|verified)"),
        ("status", r"request\s+(?:received|submitted|accepted)"),
        # Reminders and alerts
        ("reminder", r"reminder\s*:"),
        ("reminder", r"alert\s*:"),
        ("reminder", r"(?:pay|recharge)\s+now\s+to"),
        ("reminder", r"renew\s+(?:now|today|your)"),
        ("reminder", r"last\s+date\s+to\s+pay"),
        ("reminder", r"due\s+date"),
        ("reminder", r"bill\s+generated"),
        # Balance inquiry
        ("balance", r"(?:avl|available)\s+(?:bal|balance)\s*(?:is|:)"),
        ("balance", r"balance\s+(?:is|:)\s*" + _CUR),
        ("balance", r"your\s+(?:a/c|account|ac)\s+balance"),
        ("balance", r"ledger\s+balance"),
        ("balance", r"current\s+balance"),
        # OTP and security codes
        ("otp_security", r"\bOTP\s*(?:is|:)?\s*\d{4,8}"),
        ("otp_security", r"one\s*time\s*password"),
        ("otp_security", r"verification\s+code"),
        ("otp_security", r"\b(?:CVV|PIN|MPIN|ATM\s+PIN)\b"),
        ("otp_security", r"do\s+not\s+share"),
        # Promotional
        ("promotional", r"win\s+(?:up\s+to|upto)"),
        ("promotional", r"congratulations"),
        ("promotional", r"offer\s+(?:valid|expires|available)"),
        ("promotional", r"cashback\s+(?:offer|up\s+to)"),
        ("promotional", r"get\s+(?:upto|up\s+to)\s+\d+%"),
        ("promotional", r"limited\s+(?:time|period)\s+offer"),
        # FD/RD and account lifecycle
        ("account_lifecycle", r"(?:FD|RD|deposit)\s+(?:maturity|maturing|matures)"),
        ("account_lifecycle", r"(?:FD|RD)\s+(?:booked|created)\s+successfully"),
        ("account_lifecycle", r"acknowledgement\s*(?:no|number|:)"),
        ("account_lifecycle", r"reference\s+(?:no|number|id)\s*:"),
        ("account_lifecycle", r"(?:account|a/c|acct)\s+(?:has\s+been\s+)?(?:opened|created)"),
        # Loan and EMI reminders, not the actual debit
        ("loan_emi", r"EMI\s+(?:due|reminder|of\s+Rs).*(?:due\s+on|pay\s+by)"),
        ("loan_emi", r"loan\s+(?:application|approved|disbursed)"),
        # Card/account services
        ("card_service", r"card\s+(?:blocked|unblocked|dispatched|activated)"),
        ("card_service", r"limit\s+(?:increased|decreased|changed)"),
        # Payment requests and bill notices, money not yet moved
        ("payment_request", r"bill.*(?:due\s+on|pay\s+within)"),
        ("payment_request", r"disconnection\s+notice"),
        ("payment_request", r"requested\s+money"),
        ("payment_request", r"has\s+requested"),
        ("payment_request", r"on\s+approving"),
        ("payment_request", r"request\s+-\s+https"),
        ("payment_request", r"autopay\s+request"),
    ],
)

# ==================== Positive transaction evidence (strict mode) ====================

TRANSACTION_EVIDENCE_RULES = build_rule_set(
    "evidence",
    [
        # Debits
        ("debit", r"debited\s+(?:from|by|for|with|Rs|INR|₹)"),
        ("debit", _CUR + r"\s*[\d,]+(?:\.\d{2})?\s+(?:has\s+been\s+)?debited"),
        ("debit", r"withdrawn\s+(?:Rs|INR|₹|from)"),
        ("debit", r"txn\s+of\s+" + _CUR),
        ("debit", r"purchase\s+of\s+" + _CUR),
        # Credits
        ("credit", r"credited\s+(?:to|by|with|Rs|INR|₹)"),
        ("credit", _CUR + r"\s*[\d,]+(?:\.\d{2})?\s+(?:has\s+been\s+)?credited"),
        ("credit", r"deposited\s+(?:Rs|INR|₹|to|in)"),
        ("credit", r"received\s+" + _CUR),
        # UPI
        ("upi", r"UPI(?:/P2P|/P2M)?\s+of\s+" + _CUR),
        ("upi", r"sent\s+" + _CUR + r".*(?:via\s+UPI|to\s+\w+@)"),
        ("upi", r"paid\s+" + _CUR + r".*(?:UPI|@)"),
        # Bank rails
        ("bank_transfer", r"(?:NEFT|RTGS|IMPS)\s+(?:of|for)\s+" + _CUR),
        ("bank_transfer", r"transfer\s+of\s+" + _CUR),
        # Cards
        ("card", r"card\s+(?:ending(?:\s+(?:in|with))?\s*|xx)\d+\s+.*(?:Rs|INR|₹)"),
        ("card", r"spent\s+" + _CUR),
        # Payments
        ("payment", r"payment\s+of\s+" + _CUR),
        ("payment", r"paid\s+" + _CUR),
        ("payment", r"recharged?\s+(?:of|for|with)\s+" + _CUR + r".*(?:successful|done)"),
        # Refunds
        ("refund", r"refund\s+of\s+" + _CUR),
        ("refund", _CUR + r"[\d,]+.*refund(?:ed)?"),
        # EMI/auto debit that actually happened
        ("emi", r"EMI\s+(?:of\s+)?" + _CUR + r"[\d,]+.*debited"),
        ("emi", r"auto\s*debit\s+of\s+" + _CUR),
    ],
)

# ==================== Amounts (first match wins) ====================

AMOUNT_RULES = build_rule_set(
    "amount",
    [
        ("currency_rs", r"\bRs\.?\s*" + _NUM),
        ("currency_inr", r"\bINR\s*" + _NUM),
        ("currency_symbol", r"₹\s*" + _NUM),
        ("currency_rupees", r"\bRupees?\s*" + _NUM),
        ("labelled", r"\b(?:Amt|Amount|Txn)\.?\s*[:=-]?\s*" + _NUM),
        # Permissive fallbacks for messages without a currency marker
        ("bare_decimal", r"(?:\s|^)([0-9]{2,7}(?:,[0-9]{3})*\.[0-9]{2})(?:\s|$)"),
        ("bare_integer", r"(?:\s|^)([0-9]{2,7}(?:,[0-9]{3})*)(?:\s|$)"),
    ],
)

# ==================== Direction evidence (scored) ====================

DEBIT_RULES = build_rule_set(
    "debit",
    [
        ("debit", r"debited"),
        ("debit", r"withdrawn"),
        ("debit", r"spent"),
        ("debit", r"paid(?!\s+to\s+you)"),
        ("debit", r"purchase"),
        ("debit", r"payment\s+(?:of|to)"),
        ("debit", r"sent\s+(?:to|Rs|INR|₹)"),
        ("debit", r"transferred\s+to"),
        ("debit", r"debit"),
        ("debit", r"\bdr\b"),
        ("debit", r"recharged?\s+(?:of|for|with)"),
        ("debit", r"auto\s*debit"),
        ("debit", r"txn\s+of"),
    ],
)

CREDIT_RULES = build_rule_set(
    "credit",
    [
        ("credit", r"credited"),
        ("credit", r"received\s+(?:Rs|INR|₹|from)"),
        ("credit", r"deposited"),
        ("credit", r"refund"),
        ("credit", r"cashback"),
        ("credit", r"credit(?!\s*card)"),
        ("credit", r"\bcr\b"),
        ("credit", r"added\s+to\s+(?:your|a/c|ac|account)"),
        ("credit", r"salary"),
        ("credit", r"paid\s+to\s+you"),
    ],
)

# ==================== Merchant / counterparty (first usable capture wins) ====================
# Name-shaped rules rely on capitalisation, so they are compiled case-sensitive.
# A name is at most six whitespace-separated words.

MERCHANT_RULES = build_rule_set(
    "merchant",
    [
        ("upi_vpa", r"(?i:\b(?:to|from|at)\s+([a-z0-9._-]+@[a-z]+))"),
        ("named", r"\b(?:at|to)\s+([A-Z][A-Za-z0-9&]*(?:\s+[A-Za-z0-9&]+){0,5}?)(?:\s+on|\s+via|\s+ref|\.|\s+UPI|\s+VPA|\s*$)"),
        ("vpa_label", r"(?i:VPA\s*:?\s*([a-z0-9._-]+@[a-z]+))"),
        ("upi_token", r"UPI[:/]([A-Za-z0-9\s]+?)[/\s]"),
        ("for_via", r"\b(?:for|via)\s+([A-Z][A-Za-z0-9]*(?:\s+[A-Za-z0-9]+){0,5}?)(?:\s+on|\s+ref|\.|\s*$)"),
    ],
    flags=0,
)

# ==================== Sender -> institution ====================
# Substring lookup, first hit wins. Longer, more specific codes are listed
# before the short ones (AU, VI, YES) that would otherwise shadow them.

INSTITUTION_MAP: tuple[tuple[str, str], ...] = (
    # Private banks
    ("HDFCBK", "HDFC Bank"),
    ("HDFC", "HDFC Bank"),
    ("ICICIB", "ICICI Bank"),
    ("ICICI", "ICICI Bank"),
    ("AXIS", "Axis Bank"),
    ("UTIB", "Axis Bank"),
    ("KOTAK", "Kotak Bank"),
    ("INDUS", "IndusInd Bank"),
    ("FEDERAL", "Federal Bank"),
    ("RBL", "RBL Bank"),
    ("BANDHAN", "Bandhan Bank"),
    ("IDFC", "IDFC First"),
    # Public sector banks
    ("SBIN", "SBI"),
    ("SBI", "SBI"),
    ("PNB", "Punjab National Bank"),
    ("CANARA", "Canara Bank"),
    ("BOB", "Bank of Baroda"),
    ("BOI", "Bank of India"),
    ("UNION", "Union Bank"),
    ("INDIAN", "Indian Bank"),
    ("UCO", "UCO Bank"),
    ("CENTRAL", "Central Bank"),
    ("IDBI", "IDBI Bank"),
    # Foreign banks
    ("CITI", "Citibank"),
    ("HSBC", "HSBC"),
    ("DBS", "DBS Bank"),
    ("SCB", "Standard Chartered"),
    ("AMEX", "American Express"),
    # Payment apps and wallets
    ("GPAY", "Google Pay"),
    ("PAYTM", "Paytm"),
    ("PHONEPE", "PhonePe"),
    ("PHON", "PhonePe"),
    ("AMAZON", "Amazon Pay"),
    ("MOBIKWIK", "MobiKwik"),
    ("FREECHARGE", "Freecharge"),
    ("CRED", "CRED"),
    ("BHIM", "BHIM"),
    ("SLICE", "Slice"),
    ("LAZYPAY", "LazyPay"),
    ("SIMPL", "Simpl"),
    # Telecom
    ("JIO", "Jio"),
    ("AIRTEL", "Airtel"),
    ("BSNL", "BSNL"),
    # Short codes last
    ("YES", "Yes Bank"),
    ("AU", "AU Small Finance"),
    ("VI", "Vi"),
)

# Telecom routing prefix such as "VM-", "AD-", "JD-".
ROUTING_PREFIX = re.compile(r"^[A-Za-z]{2}-")

# Sender codes that are known to send financial alerts.
KNOWN_FINANCIAL_SENDERS: frozenset[str] = frozenset(
    {
        # Banks
        "HDFCBK", "HDFC", "HDFCBANK",
        "ICICIB", "ICICI", "ICICIBANK",
        "AXISBK", "AXIS", "AXISBANK",
        "SBIINB", "SBIIN", "SBI",
        "KOTAKB", "KOTAK",
        "PNBSMS", "PNB",
        "BOIIND", "BOI",
        "CANBNK", "CANARA",
        "UNIONB", "UNION",
        "IABORB", "IDBI",
        "YESBK", "YES",
        "INDUSB", "INDUS",
        "FEDBK", "FEDERAL",
        "RBLBNK", "RBL",
        # UPI and wallets
        "SBIUPI", "IKIUPI", "AXISUPI", "HDFCUPI",
        "GPAY", "GOOGLEPAY",
        "PHONEPE", "PHNEPE",
        "PAYTM", "PYTM",
        "AMAZON", "AMAZONPAY",
        "MOBIKW", "MOBIKWIK",
        "FREECHARGE", "FRCHRG",
        "AIRTEL", "AIRTELMONEY",
        "JIOMONEY", "JIO",
        # Cards
        "CITI", "CITIBANK",
        "AMEX", "AMERICANEXPRESS",
        "HSBC",
        "SCBANK", "STANDARDCHARTERED",
        "DBIBANK", "DBS",
    }
)

if not INSTITUTION_MAP or not KNOWN_FINANCIAL_SENDERS:
    raise ValueError("Sender tables must not be empty")
