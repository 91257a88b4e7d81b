from emcs.domain.consignment.util.di.provider import ConsignmentProvider

__all__ = ["ConsignmentProvider"]
