# Services package init
"""
StudySphere Backend: Services Layer
=====================================

What:  Business logic between routes (HTTP) and the database.
How:   Stateless service objects; each method receives the request's session.

Service Inventory:
    - LessonService: catalog CRUD and search
    - OrderService:  order placement (insert, then decrement spaces) and reads
    - ImageService:  lesson image lookup inside IMAGES_DIR
"""
