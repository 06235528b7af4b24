"""
Subsidy Eligibility Registry

A bitmask-based registry where a single authority assigns applicant attributes
and applicants claim a fixed subsidy when their mask satisfies the eligibility
predicate.
"""

__version__ = "1.0.0"
__author__ = "Subsidy Registry Team"
__description__ = "Bitmask attribute registry and subsidy eligibility engine"
