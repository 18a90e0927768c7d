from .product_analysis import ProductAnalysis, ProductAnalysisError, ProductAnalysisService

__all__ = ["ProductAnalysis", "ProductAnalysisError", "ProductAnalysisService"]
