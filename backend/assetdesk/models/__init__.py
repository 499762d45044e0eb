from assetdesk.models.tenant import Tenant
from assetdesk.models.user import User
from assetdesk.models.category import AssetCategory
from assetdesk.models.asset import Asset, AssetStatus, AssetCondition
from assetdesk.models.activity import AssetActivity, AssetAction

__all__ = [
    "Tenant",
    "User",
    "AssetCategory",
    "Asset", "AssetStatus", "AssetCondition",
    "AssetActivity", "AssetAction",
]
