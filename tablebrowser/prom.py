from prometheus_client import CollectorRegistry

# Dedicated registry so repeated imports in tests never collide with the
# process-wide default one.
REGISTRY = CollectorRegistry(auto_describe=True)
