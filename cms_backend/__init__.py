"""
Website CMS backend: admins, multilingual blogs, contacts, testimonials
"""
__version__ = "1.0.0"
