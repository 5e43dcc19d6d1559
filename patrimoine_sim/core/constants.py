"""Model constants - single source of truth for envelope rules and labels."""

from typing import Final

# Annual rates in %
SCPI_REVALUATION: Final = 1.0
LIVRET_RATE: Final = 1.0
AV_PER_ENTRY_FEES: Final = 4.0
AV_PER_MGMT_FEES: Final = 1.0
TAUX_PRELEVEMENTS_SOCIAUX: Final = 17.2

TMI_OPTIONS: Final = (11, 30, 41, 45)

# Borrower insurance brackets: (max age inclusive, annual rate % of borrowed capital)
INSURANCE_BRACKETS: Final = (
    (35, 0.15),
    (45, 0.30),
    (50, 0.50),
)
INSURANCE_RATE_SENIOR: Final = 0.70

# Display metadata, in aggregation order
ENVELOPE_LABELS: Final = {
    "scpi": "SCPI Comptant",
    "scpi-credit": "SCPI Crédit",
    "av": "Assurance Vie",
    "per": "PER",
}
ENVELOPE_COLORS: Final = {
    "scpi": "#7c5cfc",
    "scpi-credit": "#c084fc",
    "av": "#38bdf8",
    "per": "#fb923c",
}

# Chart series keys
CHART_MONTH: Final = "month"
CHART_INVESTED: Final = "Capital investi"
CHART_INTERESTS: Final = "Intérêts générés"
CHART_TOTAL: Final = "Stratégie patrimoniale"

# Fee comparison ("your bank" vs "our solution")
FEE_COMPARISON_YEARS: Final = 20
BANK_ENTRY_FEES: Final = 1.0
BANK_MGMT_FEES: Final = 0.85
BANK_RATE: Final = 2.0
SOLUTION_ENTRY_FEES: Final = 4.0
SOLUTION_MGMT_FEES: Final = 0.5
SOLUTION_RATE: Final = 4.0
