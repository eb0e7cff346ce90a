"""
Customers module.

- List, create, view and edit customers
- Name search and top customers by reservation count
- Reservation booking from the customer detail page
"""
