# -*- coding: utf-8 -*-
"""Translated labels used to recognise statement layouts.

German is the primary statement language; Italian and English variants are
listed beside it. Header labels are compared after ``strip()`` against the
exact upper-case text printed in the PDF.
"""

# --- Section markers ---
# start markers must match a fragment exactly, end markers are substrings
SECTION_MARKERS = {
  "cash": {
    "start": ["UMSATZÜBERSICHT", "TRANSAZIONI SUL CONTO", "ACCOUNT TRANSACTIONS"],
    "end": ["BARMITTELÜBERSICHT", "CASH SUMMARY", "BALANCE OVERVIEW"],
  },
  "interest": {
    "start": ["TRANSAKTIONSÜBERSICHT", "TRANSACTION OVERVIEW", "TRANSACTIONS"],
    "end": ["HINWEISE ZUM KONTOAUSZUG", "NOTES TO ACCOUNT STATEMENT", "ACCOUNT STATEMENT NOTES"],
  },
}

# --- Cash table headings ---
CASH_HEADER_KEYWORDS = [
  "DATUM", "TYP", "BESCHREIBUNG", "ZAHLUNGSEINGANG", "ZAHLUNGSAUSGANG", "SALDO",
  # Italian
  "DATA", "TIPO", "DESCRIZIONE", "IN ENTRATA", "IN USCITA",
  # English
  "DATE", "TYPE", "DESCRIPTION", "MONEY", "IN", "OUT", "BALANCE",
]

CASH_HEADER_LABELS = {
  "datum": ["DATUM", "DATA", "DATE"],
  "typ": ["TYP", "TIPO", "TYPE"],
  "beschreibung": ["BESCHREIBUNG", "DESCRIZIONE", "DESCRIPTION"],
  "zahlungseingang": ["ZAHLUNGSEINGANG", "IN ENTRATA"],
  "zahlungsausgang": ["ZAHLUNGSAUSGANG", "IN USCITA"],
  "saldo": ["SALDO", "BALANCE"],
}

# (incoming, outgoing) pairs printed together in one merged "payments" cell
MERGED_PAYMENT_LABELS = [
  ("ZAHLUNGSEINGANG", "ZAHLUNGSAUSGANG"),
  ("IN ENTRATA", "IN USCITA"),
  ("MONEY IN", "MONEY OUT"),
]

# headings that English statements split over two text runs
COMPOSITE_HEADERS = {
  "zahlungseingang": ("MONEY", "IN"),
  "zahlungsausgang": ("MONEY", "OUT"),
}

# --- Money market fund (interest) table headings ---
INTEREST_HEADER_LABELS = {
  "datum": ["DATUM", "DATA", "DATE"],
  "zahlungsart": ["ZAHLUNGSART", "TIPO DI PAGAMENTO", "PAYMENT TYPE"],
  "geldmarktfonds": ["GELDMARKTFONDS", "FONDO MONETARIO", "MONEY MARKET FUND"],
  "stueck": ["STÜCK", "QUOTE", "SHARES"],
  "kurs": ["KURS PRO STÜCK", "PREZZO PER QUOTA", "PRICE PER SHARE"],
  "betrag": ["BETRAG", "IMPORTO", "AMOUNT"],
}

INTEREST_HEADER_KEYWORDS = [label for labels in INTEREST_HEADER_LABELS.values() for label in labels]

# --- Dates in different languages ---
# keys are lower-case and accent free, see normalize.strip_accents
MONTHS_MAP = {
  # German
  "jan": 1, "januar": 1,
  "feb": 2, "februar": 2,
  "mar": 3, "marz": 3, "mrz": 3,
  "apr": 4, "april": 4,
  "mai": 5,
  "jun": 6, "juni": 6,
  "jul": 7, "juli": 7,
  "aug": 8, "august": 8,
  "sep": 9, "sept": 9, "september": 9,
  "okt": 10, "oktober": 10,
  "nov": 11, "november": 11,
  "dez": 12, "dezember": 12,

  # Italian
  "gen": 1, "gennaio": 1,
  "febb": 2, "febbraio": 2,
  "marzo": 3,
  "aprile": 4,
  "mag": 5, "maggio": 5,
  "giu": 6, "giugno": 6,
  "lug": 7, "luglio": 7,
  "ago": 8, "agosto": 8,
  "set": 9, "sett": 9, "settembre": 9,
  "ott": 10, "ottobre": 10,
  "novembre": 11,
  "dic": 12, "dicembre": 12,

  # English
  "january": 1,
  "february": 2,
  "march": 3,
  "may": 5,
  "june": 6,
  "july": 7,
  "oct": 10, "october": 10,
  "dec": 12, "december": 12,
}

# --- Trading descriptions ---
TRADE_TYPE = "Handel"
BUY_ACTION = "Kauf"
SELL_ACTION = "Verkauf"
