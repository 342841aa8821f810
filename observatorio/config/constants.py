"""
Application-wide constants.

Target deputy, legislative periods, featured bills and chart colours live here.
"""

# Target deputy. The co-authorship table has spelled the name in several
# ways across collection runs; the first variant found there wins.
TARGET_DEPUTY = "Jose Antonio Kast Rist"
TARGET_VARIANTS = [
    "Jose Antonio Kast Rist",
    "José Antonio Kast Rist",
    "Kast Rist Jose Antonio",
]

# Chilean legislative terms start in March: (start year, label)
LEGISLATIVE_PERIODS = [
    (2002, "2002 - 2006"),
    (2006, "2006 - 2010"),
    (2010, "2010 - 2014"),
    (2014, "2014 - 2018"),
    (2018, "2018 - 2022"),
]
PERIOD_START_MONTH = 3
PERIOD_UNKNOWN = "Desconocido"
PERIOD_OTHER = "Otros"

# Periods offered in the period selector (terms served by the target)
PERIODOS = [
    "2002 - 2006",
    "2006 - 2010",
    "2010 - 2014",
    "2014 - 2018",
]

# Featured bills: mix of enacted laws and high-profile proposals
FEATURED_IDS = [
    "3515-07",  # Responsabilidad penal adolescente
    "3992-07",  # Sistema de responsabilidad penal
    "4724-07",  # Delitos sexuales contra menores
    "4843-03",  # Pena de muerte
    "3876-07",  # Violencia intrafamiliar
]
FEATURED_COUNT = 5

# Placeholder labels shown when a value is missing
NO_ALLY = "N/A"
UNKNOWN_COMMISSION = "Desconocida"

# Chart palette
CHART_COLORS = [
    "#c0392b", "#2ecc71", "#3498db", "#f39c12",
    "#9b59b6", "#1abc9c", "#e67e22", "#95a5a6",
]
