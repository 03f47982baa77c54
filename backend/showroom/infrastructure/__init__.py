"""Infrastructure Layer: MongoDB client, document helpers and logging setup.

Invariants:
    - All driver exceptions leave this layer as ShowroomError subclasses
"""
