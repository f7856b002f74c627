"""State layer.

Holds the most recently fetched request list and the display policy
deciding which requests become map annotations.
"""
