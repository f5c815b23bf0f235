# Routes package init
"""
Employees API — API Routes Package
====================================

Route Inventory:
    - employees.py:  GET/POST   /employees
                     GET/PUT/DELETE /employees/{id}
                     GET        /employees/by-series/{title}
    - health.py:     GET        /health

Routes are thin: read the request, call the service, pick the status code.
"""
