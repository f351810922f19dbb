"""
Theurgy - Command implementations for Epigraph.

Each module corresponds to a top-level CLI command:
- serve:    Run the HTTP action endpoint
- describe: Print the action descriptor
- inscribe: Build and serialize a storeMessage transaction
- decipher: Decode a serialized transaction
"""
