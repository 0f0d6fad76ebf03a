"""
Presentation layer: the HTTP root served by ``Ignis.listen``.
"""
