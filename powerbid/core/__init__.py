"""
Core building blocks: models, validators, rules and the error taxonomy.
"""
