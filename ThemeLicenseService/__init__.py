"""
Theme License Service Django project.
"""
