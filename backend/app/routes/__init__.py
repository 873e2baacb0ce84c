# Routes package init
"""
StudySphere Backend: API Routes Package
=========================================

Route Inventory:
    - lessons.py: GET    /api/lessons          (catalog)
                  GET    /api/lessons/{id}     (one lesson)
                  POST   /api/lessons          (create)
                  PUT    /api/lessons/{id}     (partial update)
                  DELETE /api/lessons/{id}     (remove)
    - search.py:  GET    /api/search?q=        (catalog search)
    - orders.py:  POST   /api/orders           (place order)
                  GET    /api/orders           (recent orders)
                  GET    /api/orders/{id}      (one order)
    - images.py:  GET    /images/{filename}    (lesson images)
    - health.py:  GET    /health               (service health check)

Routes stay thin: read the request, call a service, set headers.
"""
