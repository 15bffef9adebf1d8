"""
services/ - Business Layer
===========================
Sits between the HTTP handlers and the repositories. Validates request
input and decides which repository calls to make.
"""
