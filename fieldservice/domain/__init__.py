"""Domain packages: one per resource, each with schemas, repository, service and router"""
