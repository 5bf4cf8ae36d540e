"""
SmartFlora - mocked backend for monitoring and configuring smart plant pots.
"""
