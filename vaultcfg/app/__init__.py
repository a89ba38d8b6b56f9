"""
vaultcfg HTTP application.
"""
