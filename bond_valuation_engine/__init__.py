"""
Bond Valuation Engine

Modules:
- utils: payment schedule arithmetic (next payment, remaining periods, fractional period)
- cashflows: future cash flows of a fixed-rate bond
- ytm: closed-form yield-to-maturity approximation
- risk: Macaulay / Modified duration
- isin: ISIN format + mod-10 checksum validation
- bonds: bond terms, payment terms, analytics record
- valuation: single-bond orchestration (YTM -> durations)
- portfolio: market-value weighted portfolio aggregation
- validation: string request records -> Bond
- results: Ok / Err wrappers over engine errors
- errors, config: error taxonomy, constants + logging setup

Callers import from the submodules.
"""
