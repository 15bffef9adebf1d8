"""
handlers/ - Presentation Layer
================================
FastAPI route handlers. Each handler reads the HTTP request,
delegates to the appropriate Service, and shapes the JSON response.
No business logic lives here.
"""
