"""
Core scoring engine: normative reference models, percentile computation,
point rules and score aggregation. Pure computation, no I/O.
"""
