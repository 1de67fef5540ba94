"""Dividend income tracker for a monthly-paying ETF."""
