"""
Vending machine transaction engine.
"""
