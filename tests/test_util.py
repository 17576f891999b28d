import pytest

from dtattr.util import (
    cronus_to_dtree_class,
    dtree_to_cronus_class,
    dtree_to_fapi_class,
    name_to_class,
)


def test_known_mappings():
    assert dtree_to_fapi_class("core") == "TARGET_TYPE_CORE"
    assert dtree_to_cronus_class("core") == "c"
    assert cronus_to_dtree_class("proc_chip") == "proc"
    assert dtree_to_fapi_class("root") == "TARGET_TYPE_SYSTEM"


def test_perv_maps_to_first_dtree_class():
    assert cronus_to_dtree_class("perv") == "chiplet"
    assert dtree_to_cronus_class("chiplet") == "perv"
    assert dtree_to_cronus_class("perv") == "perv"


def test_unknown_classes():
    assert dtree_to_fapi_class("nosuch") is None
    assert dtree_to_cronus_class("nosuch") is None
    assert cronus_to_dtree_class("nosuch") is None


@pytest.mark.parametrize("dtree_class", ["core", "proc", "mem_port", "ocmb", "tpm", "chiplet"])
def test_cronus_round_trip_keeps_cronus_class(dtree_class):
    cronus = dtree_to_cronus_class(dtree_class)
    back = cronus_to_dtree_class(cronus)
    assert dtree_to_cronus_class(back) == cronus
    assert dtree_to_fapi_class(back) == dtree_to_fapi_class(dtree_class)


@pytest.mark.parametrize(
    "name, expected",
    [
        ("", "root"),
        ("core12", "core"),
        ("proc0@1000", "proc"),
        ("mem_port3", "mem_port"),
        ("bmc", "bmc"),
        ("@xyz7", "xyz"),
    ],
)
def test_name_to_class(name, expected):
    assert name_to_class(name) == expected


def test_name_to_class_rejects_only_at_signs():
    with pytest.raises(ValueError):
        name_to_class("@@")