"""Underfloor heating calculation modules.

Modules:
    rules: Floor finish and pipe step lookup tables
    calculation: Pipe step, lengths and circuit count for a heated area
    advisory: Leveled technical warnings derived from a calculation
    catalog: Product/manifold catalog loading
    budget: Itemized materials budget from a calculation
"""
