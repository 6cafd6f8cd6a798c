"""
Domain layer - business errors shared by services and routers.
"""
