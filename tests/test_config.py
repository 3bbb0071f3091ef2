import numpy as np
import pytest
from omegaconf import OmegaConf
from omegaconf.errors import ConfigKeyError

from kring import CapacityError, RingBuffer, RingBufferConfig
from kring.utils.config import get_config_value, load_config


def test_get_config_value_sources():
    assert get_config_value(RingBufferConfig(capacity=8), "capacity") == 8
    assert get_config_value({"capacity": 16}, "capacity") == 16
    assert get_config_value(OmegaConf.create({"capacity": 32}), "capacity") == 32


def test_get_config_value_defaults():
    assert get_config_value(None, "capacity", 4) == 4
    assert get_config_value({}, "capacity", 4) == 4
    assert get_config_value(OmegaConf.create({}), "dtype", "object") == "object"


def test_get_config_value_rejects_unknown_option():
    with pytest.raises(KeyError):
        get_config_value({"overwrite": True}, "overwrite")


def test_get_config_value_rejects_unsupported_config():
    with pytest.raises(TypeError):
        get_config_value(["capacity", 8], "capacity")


def test_from_dataclass_config():
    rb = RingBuffer.from_config(RingBufferConfig(capacity=8, dtype="uint8"))
    assert rb.capacity == 8
    assert rb.dtype == np.uint8
    assert rb.shape == ()
    assert not rb.strict_index


def test_from_partial_dict_uses_defaults():
    rb = RingBuffer.from_config({"capacity": 16})
    assert rb.capacity == 16
    assert rb.dtype == object


def test_from_dictconfig():
    cfg = OmegaConf.create({"capacity": 4, "dtype": "float32", "shape": [2], "strict_index": True})
    rb = RingBuffer.from_config(cfg)
    assert rb.shape == (2,)
    assert rb.dtype == np.float32
    assert rb.strict_index


def test_from_config_validates_capacity():
    with pytest.raises(CapacityError):
        RingBuffer.from_config({"capacity": 12})


def test_load_config_defaults():
    cfg = load_config()
    assert cfg.capacity == 64
    assert cfg.dtype == "object"
    assert list(cfg.shape) == []
    assert cfg.strict_index is False


def test_load_config_from_yaml(tmp_path):
    path = tmp_path / "ring.yaml"
    path.write_text("capacity: 32\ndtype: int16\nshape: [3]\n")
    rb = RingBuffer.from_config(load_config(path))
    assert rb.capacity == 32
    assert rb.dtype == np.int16
    assert rb.shape == (3,)


def test_load_config_from_mapping():
    cfg = load_config({"capacity": 8, "strict_index": True})
    assert cfg.capacity == 8
    assert cfg.strict_index is True
    assert cfg.dtype == "object"


def test_load_config_rejects_unknown_keys():
    with pytest.raises(ConfigKeyError):
        load_config({"capacity": 8, "overwrite": True})
