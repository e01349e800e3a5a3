"""
grading/ - Rice grain grading engine

Modules:
    utils.py              - Decimal percentage utilities
    catalog.py            - Standards catalog loader + name lookup
    compliance_scorer.py  - Per-criterion compliance percentages
    defects.py            - Defect-rice breakdown by grain type
    formatting.py         - Bound labels + percentage strings for the result view
    grader.py             - Lookup + scoring for one create-inspection request
"""
