from boutique.api.routes import bags_router, dashboard_router, dresses_router, sales_router, shoes_router

__all__ = ["shoes_router", "bags_router", "dresses_router", "sales_router", "dashboard_router"]
