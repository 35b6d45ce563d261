"""
Travel planner pricing backend.

Re-prices AI-generated itineraries with live search data and manages
the vehicle multipliers behind the transport estimate.
"""
