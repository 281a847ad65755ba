"""
Scripts ejecutables (python -m plazas.scripts.<nombre>).
"""
