"""Arena Booking package.

Room booking for players, shift checklists for employees and approval /
scheduling for supervisors. Organized by feature modules (users, rooms,
bookings, shifts, tasks, notifications) with a thin Flask controller layer
over service and repository layers.
"""
