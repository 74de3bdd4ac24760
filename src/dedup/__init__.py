# src/dedup/__init__.py — v1
