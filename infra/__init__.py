"""Deployment descriptor and CDK app for the uppercase API."""
