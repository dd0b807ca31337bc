from dfu_assistant.domain.models import CatalogEntry, Platform, Variant

# ==============================================================================
# INTEGRATION PATHS
# ==============================================================================

INTEGRATION_ROOT = "1800-EcuIntegration"
DMIU_SUBPATH = "core/development/dmiu"

# Used whenever no concrete variant applies (direct mode or GENERIC).
PLACEHOLDER_INTEGRATION_PATH = f"{INTEGRATION_ROOT}/[PLATFORM]/{DMIU_SUBPATH}"

# ==============================================================================
# VARIANT DEFINITIONS
# ==============================================================================

s32g_linux = CatalogEntry(
    variant=Variant.S32G_LINUX,
    title="S32G Linux",
    description="NXP S32G application cores running Linux, dmiu as a POSIX daemon.",
    platform=Platform.POSIX,
    integration_path=f"{INTEGRATION_ROOT}/S32G_Linux/{DMIU_SUBPATH}",
    detection_globs=(f"*{INTEGRATION_ROOT}/S32G_Linux/*",),
)

s32g_autosar = CatalogEntry(
    variant=Variant.S32G_AUTOSAR,
    title="S32G AUTOSAR",
    description="NXP S32G real-time cores running Classic AUTOSAR.",
    platform=Platform.AUTOSAR,
    integration_path=f"{INTEGRATION_ROOT}/S32G_Autosar/{DMIU_SUBPATH}",
    detection_globs=(f"*{INTEGRATION_ROOT}/S32G_Autosar/*",),
)

tc397_autosar = CatalogEntry(
    variant=Variant.TC397_AUTOSAR,
    title="TC397 AUTOSAR",
    description="Infineon AURIX TC397 safety controller running Classic AUTOSAR.",
    platform=Platform.AUTOSAR,
    integration_path=f"{INTEGRATION_ROOT}/TC397_Autosar/{DMIU_SUBPATH}",
    detection_globs=(f"*{INTEGRATION_ROOT}/TC397_Autosar/*",),
)

rcar_qnx = CatalogEntry(
    variant=Variant.RCAR_QNX,
    title="R-Car QNX",
    description="Renesas R-Car running QNX Neutrino, dmiu as a POSIX daemon.",
    platform=Platform.POSIX,
    integration_path=f"{INTEGRATION_ROOT}/RCar_QNX/{DMIU_SUBPATH}",
    detection_globs=(f"*{INTEGRATION_ROOT}/RCar_QNX/*",),
)

# --- CATCH-ALL: any integration tree that matches no known board ---
generic = CatalogEntry(
    variant=Variant.GENERIC,
    title="Generic / Unknown",
    description="Unlisted board or software stack; the path keeps a [PLATFORM] placeholder.",
    platform=None,
    integration_path=PLACEHOLDER_INTEGRATION_PATH,
    detection_globs=(f"*{INTEGRATION_ROOT}/*",),
)

# Order matters: detection walks this list and the first hit wins, so the
# catch-all must stay last. It is also the numbering shown to the user.
VARIANT_CATALOG = (
    s32g_linux,
    s32g_autosar,
    tc397_autosar,
    rcar_qnx,
    generic,
)
