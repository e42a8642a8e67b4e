"""Domain layer for OpenClinica Connector.

This layer contains the ODM clinical data tree and the services that build it.
It is independent of XML, HTTP and other infrastructure concerns.
"""
