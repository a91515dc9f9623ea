"""
FastAPI routers for all API endpoints.

One router per resource under /api, plus the public /health check. Routes
validate input through the schemas, call one service function, and map
the result or raise a HotPayError.
"""
