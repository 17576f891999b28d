"""Mapping between device tree, FAPI and Cronus target class names."""

from __future__ import annotations

from typing import Optional

# (fapi, device tree, cronus)
_CLASS_MAP = (
    ("TARGET_TYPE_ABUS", "smpgroup", "smpgroup"),
    ("TARGET_TYPE_CAPP", "capp", "capp"),
    ("TARGET_TYPE_CORE", "core", "c"),
    ("TARGET_TYPE_DIMM", "dimm", "dimm"),
    ("TARGET_TYPE_DMI", "dmi", "dmi"),
    ("TARGET_TYPE_EQ", "eq", "eq"),
    ("TARGET_TYPE_EX", "ex", "ex"),
    ("TARGET_TYPE_FC", "fc", "fc"),
    ("TARGET_TYPE_IOHS", "iohs", "iohs"),
    ("TARGET_TYPE_L4", "l4", "l4"),
    ("TARGET_TYPE_MBA", "mba", "mba"),
    ("TARGET_TYPE_MC", "mc", "mc"),
    ("TARGET_TYPE_MCA", "mca", "mca"),
    ("TARGET_TYPE_MCBIST", "mcbist", "mcbist"),
    ("TARGET_TYPE_MCC", "mcc", "mcc"),
    ("TARGET_TYPE_MCS", "mcs", "mcs"),
    ("TARGET_TYPE_MEMBUF_CHIP", "membuf_chip", "membuf_chip"),
    ("TARGET_TYPE_MEM_PORT", "mem_port", "mem_port"),
    ("TARGET_TYPE_MI", "mi", "mi"),
    ("TARGET_TYPE_NMMU", "nmmu", "nmmu"),
    ("TARGET_TYPE_OBUS", "obus", "obus"),
    ("TARGET_TYPE_OBUS_BRICK", "obus_brick", "obus_brick"),
    ("TARGET_TYPE_OCMB_CHIP", "ocmb", "ocmb"),
    ("TARGET_TYPE_OMI", "omi", "omi"),
    ("TARGET_TYPE_OMIC", "omic", "omic"),
    ("TARGET_TYPE_PAU", "pau", "pau"),
    ("TARGET_TYPE_PAUC", "pauc", "pauc"),
    ("TARGET_TYPE_PEC", "pec", "pec"),
    ("TARGET_TYPE_PERV", "chiplet", "perv"),
    ("TARGET_TYPE_PERV", "perv", "perv"),
    ("TARGET_TYPE_PHB", "phb", "phb"),
    ("TARGET_TYPE_PMIC", "pmic", "pmic"),
    ("TARGET_TYPE_PPE", "ppe", "ppe"),
    ("TARGET_TYPE_PROC_CHIP", "proc", "proc_chip"),
    ("TARGET_TYPE_SBE", "sbe", "sbe"),
    ("TARGET_TYPE_SYSTEM", "root", "system"),
    ("TARGET_TYPE_XBUS", "xbus", "xbus"),
    ("TARGET_TYPE_NX", "nx", "nx"),
    ("TARGET_TYPE_OCC", "occ", "occ"),
    ("TARGET_TYPE_TPM", "tpm", "tpm"),
    ("TARGET_TYPE_BMC", "bmc", "bmc"),
    ("TARGET_TYPE_OSCREFCLK", "oscrefclk", "oscrefclk"),
)

_DIGITS = "0123456789"


def dtree_to_fapi_class(dtree_class: str) -> Optional[str]:
    """Return the FAPI target type for a device tree class, or None."""
    return next((fapi for fapi, dtree, _ in _CLASS_MAP if dtree == dtree_class), None)


def cronus_to_dtree_class(cronus_class: str) -> Optional[str]:
    """Return the first device tree class for a Cronus class, or None."""
    return next((dtree for _, dtree, cronus in _CLASS_MAP if cronus == cronus_class), None)


def dtree_to_cronus_class(dtree_class: str) -> Optional[str]:
    """Return the Cronus class for a device tree class, or None."""
    return next((cronus for _, dtree, cronus in _CLASS_MAP if dtree == dtree_class), None)


def name_to_class(name: str) -> str:
    """Derive the class of a node from its name.

    The unit address after '@' and any trailing index digits are dropped;
    the unnamed root node is of class "root".
    """
    if name == "":
        return "root"
    base = next((part for part in name.split("@") if part), None)
    if base is None:
        raise ValueError(f"node name without a base: {name!r}")
    return base.rstrip(_DIGITS)