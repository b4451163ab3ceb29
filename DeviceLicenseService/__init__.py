"""
Device License Service Django project.
"""
