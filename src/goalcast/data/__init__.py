"""
Data layer for GoalCast.

Includes:
- Table schemas and validation (`schema`)
- Loading utilities (`data_loader`)
"""
