"""
Form features for GoalCast.

- `form` derives league baselines, recent form and fixture ratings from
  standings and results tables.
"""
