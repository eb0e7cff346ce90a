"""
Reservations module: bookings owned by a customer.
"""
