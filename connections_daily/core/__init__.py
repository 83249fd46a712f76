"""
Session state, events and the pure rules engine.
"""
