"""
Integration gates: large-scale property checks over nd_core with receipts.
"""
