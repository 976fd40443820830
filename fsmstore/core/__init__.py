"""
Core engine: machine definitions, builder, validation and the store that maps
owner types to their machines.
"""
