"""
FastAPI prediction service for GoalCast.
"""
