"""
flarewatch - flare-risk scoring and lifestyle correlation engine.

Turns self-reported autoimmune symptoms into normalized 0-100 risk scores with
per-symptom contributions, and correlates stress, sleep and food logs against
recorded flares.
"""
__version__ = "0.1.0"
