"""Bounded contexts of the equation rendering pipeline: intake, styling, rendering."""
