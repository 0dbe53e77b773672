"""Invoicely: invoicing backend with trial gating and Stripe subscriptions."""
