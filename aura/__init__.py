"""
Aura - client for the AI text detector.

Authenticates through Supabase, submits text to the detection API,
keeps a paginated detection history, shows usage statistics and drives
the Stripe-hosted upgrade and billing flows.
"""

__version__ = "0.1.0"
