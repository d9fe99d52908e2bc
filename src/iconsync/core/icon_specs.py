"""iOS AppIcon 所需图标规格表。"""

from __future__ import annotations

from iconsync.core.models import IconSpec

IOS_ICON_SPECS: tuple[IconSpec, ...] = (
    IconSpec("20x20", "iphone", 2, "Icon-App-20x20@2x.png", 40),
    IconSpec("20x20", "iphone", 3, "Icon-App-20x20@3x.png", 60),
    IconSpec("29x29", "iphone", 2, "Icon-App-29x29@2x.png", 58),
    IconSpec("29x29", "iphone", 3, "Icon-App-29x29@3x.png", 87),
    IconSpec("40x40", "iphone", 2, "Icon-App-40x40@2x.png", 80),
    IconSpec("40x40", "iphone", 3, "Icon-App-40x40@3x.png", 120),
    IconSpec("60x60", "iphone", 2, "Icon-App-60x60@2x.png", 120),
    IconSpec("60x60", "iphone", 3, "Icon-App-60x60@3x.png", 180),
    IconSpec("1024x1024", "ios-marketing", 1, "Icon-App-1024x1024@1x.png", 1024),
)

MARKETING_IDIOM = "ios-marketing"
