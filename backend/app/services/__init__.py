# Services module
#
# Import services from their modules directly; schemas import
# pricing_service, so eager imports here would be circular.
