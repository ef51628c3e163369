"""
Service layer for Air Route Advisor
"""

from .data_loader import DataLoader
from .route_analysis import RouteAnalyzer

__all__ = ['DataLoader', 'RouteAnalyzer']
