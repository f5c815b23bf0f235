# Services package init
"""
Employees API — Services Layer
================================

What:  The request-to-SQL mapping, sitting between routes (HTTP) and the
       connection pool (persistence).

Service Inventory:
    - EmployeeService: one parameterized statement per /employees operation

Routes handle status codes; services handle SQL and "no row" outcomes.
"""
