"""
nd_universe: exact n-d grid indexing, rasterization and pairing.
"""
