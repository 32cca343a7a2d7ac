"""HTTP service exposing pathfinder queries."""
