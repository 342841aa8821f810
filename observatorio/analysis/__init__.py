"""Analysis module - classification rules, dataset processing and query helpers."""
