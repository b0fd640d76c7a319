"""
complaints_proxy.domain - Record vocabularies, canonical shapes and the
sheet-row mapping between them.
"""
