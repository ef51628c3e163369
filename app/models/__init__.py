"""
Response models for Air Route Advisor
"""
