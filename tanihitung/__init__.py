"""
TaniHitung — agricultural calculators with saved history and CSV export.
"""
