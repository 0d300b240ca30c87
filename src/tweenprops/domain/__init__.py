"""
Domain layer: keyframes, props and the value objects they use.
"""
