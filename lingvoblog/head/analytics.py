"""Third-party analytics tags (GA4, Google Tag Manager, Meta Pixel)."""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

import structlog

from lingvoblog.head.document import HeadElement, Placement
from lingvoblog.head.reconcile import ReconcilePolicy, reconcile

if TYPE_CHECKING:
    from lingvoblog.head.document import HeadDocument
    from lingvoblog.head.reconcile import HeadPatch
    from lingvoblog.models.site import SiteSettings

logger = structlog.get_logger()

OWNER = "analytics"

GA4_SCRIPT_ID = "ga4-script"
GA4_CONFIG_ID = "ga4-config"
GTM_SCRIPT_ID = "gtm-script"
GTM_NOSCRIPT_ID = "gtm-noscript"
FB_PIXEL_ID = "fb-pixel"
FB_PIXEL_NOSCRIPT_ID = "fb-pixel-noscript"

# IDs are interpolated into inline scripts, so only the vendor formats pass.
ID_FORMATS = {
    "ga4_measurement_id": re.compile(r"G-[A-Z0-9]+"),
    "gtm_container_id": re.compile(r"GTM-[A-Z0-9]+"),
    "meta_pixel_id": re.compile(r"[0-9]+"),
}

_GA4_CONFIG = """
window.dataLayer = window.dataLayer || [];
function gtag(){{dataLayer.push(arguments);}}
gtag('js', new Date());
gtag('config', '{measurement_id}');
"""

_GTM_LOADER = """
(function(w,d,s,l,i){{w[l]=w[l]||[];w[l].push({{'gtm.start':
new Date().getTime(),event:'gtm.js'}});var f=d.getElementsByTagName(s)[0],
j=d.createElement(s),dl=l!='dataLayer'?'&l='+l:'';j.async=true;j.src=
'https://www.googletagmanager.com/gtm.js?id='+i+dl;f.parentNode.insertBefore(j,f);
}})(window,document,'script','dataLayer','{container_id}');
"""

_GTM_NOSCRIPT = (
    '<iframe src="https://www.googletagmanager.com/ns.html?id={container_id}" '
    'height="0" width="0" style="display:none;visibility:hidden"></iframe>'
)

_FB_PIXEL = """
!function(f,b,e,v,n,t,s)
{{if(f.fbq)return;n=f.fbq=function(){{n.callMethod?
n.callMethod.apply(n,arguments):n.queue.push(arguments)}};
if(!f._fbq)f._fbq=n;n.push=n;n.loaded=!0;n.version='2.0';
n.queue=[];t=b.createElement(e);t.async=!0;
t.src=v;s=b.getElementsByTagName(e)[0];
s.parentNode.insertBefore(t,s)}}(window, document,'script',
'https://connect.facebook.net/en_US/fbevents.js');
fbq('init', '{pixel_id}');
fbq('track', 'PageView');
"""

_FB_NOSCRIPT = (
    '<img height="1" width="1" style="display:none" '
    'src="https://www.facebook.com/tr?id={pixel_id}&ev=PageView&noscript=1"/>'
)


def _by_id(
    element_id: str,
    tag: str,
    attrs: dict[str, str] | None = None,
    text: str = "",
    placement: Placement = Placement.HEAD,
    prepend: bool = False,
) -> HeadElement:
    return HeadElement(
        key=f"#{element_id}",
        tag=tag,
        attrs={"id": element_id, **(attrs or {})},
        text=text,
        owner=OWNER,
        placement=placement,
        prepend=prepend,
    )


def _configured_id(settings: SiteSettings, key: str) -> str:
    value = getattr(settings, key).strip()
    if value and not ID_FORMATS[key].fullmatch(value):
        logger.warning("Ignoring malformed analytics id", setting=key, value=value)
        return ""
    return value


def analytics_elements(settings: SiteSettings) -> list[HeadElement]:
    """Desired analytics tags. Empty or malformed IDs contribute nothing."""
    elements: list[HeadElement] = []

    if ga4 := _configured_id(settings, "ga4_measurement_id"):
        elements.append(
            _by_id(
                GA4_SCRIPT_ID,
                "script",
                attrs={"async": "", "src": f"https://www.googletagmanager.com/gtag/js?id={ga4}"},
            )
        )
        elements.append(
            _by_id(GA4_CONFIG_ID, "script", text=_GA4_CONFIG.format(measurement_id=ga4))
        )

    if gtm := _configured_id(settings, "gtm_container_id"):
        elements.append(
            _by_id(GTM_SCRIPT_ID, "script", text=_GTM_LOADER.format(container_id=gtm))
        )
        elements.append(
            _by_id(
                GTM_NOSCRIPT_ID,
                "noscript",
                text=_GTM_NOSCRIPT.format(container_id=gtm),
                placement=Placement.BODY,
                prepend=True,
            )
        )

    if pixel := _configured_id(settings, "meta_pixel_id"):
        elements.append(_by_id(FB_PIXEL_ID, "script", text=_FB_PIXEL.format(pixel_id=pixel)))
        elements.append(
            _by_id(FB_PIXEL_NOSCRIPT_ID, "noscript", text=_FB_NOSCRIPT.format(pixel_id=pixel))
        )

    return elements


def inject_analytics(document: HeadDocument, settings: SiteSettings) -> HeadPatch:
    """Add each tag whose id is not yet on the page. Existing tags are left alone."""
    return reconcile(document, analytics_elements(settings), ReconcilePolicy.INSERT_ONLY)
