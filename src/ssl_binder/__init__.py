"""Bind Key Vault certificates to App Service custom hostnames."""
