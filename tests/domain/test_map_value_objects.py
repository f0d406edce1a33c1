# tests/domain/test_map_value_objects.py
import pytest

from mapstore.domain.map.errors import MalformedUUIDError
from mapstore.domain.map.value_objects import MapId, MapOptions


def test_map_id_valido_e_canonicalizado() -> None:
    map_id = MapId("5F0D8B9E-3C1A-4A57-9D1E-2B8F5C6A7E10")
    assert map_id.valor == "5f0d8b9e-3c1a-4a57-9d1e-2b8f5c6a7e10"
    assert str(map_id) == map_id.valor


def test_map_ids_iguais_sao_iguais_e_mesmo_hash() -> None:
    a = MapId("5f0d8b9e-3c1a-4a57-9d1e-2b8f5c6a7e10")
    b = MapId("5F0D8B9E-3C1A-4A57-9D1E-2B8F5C6A7E10")
    assert a == b
    assert hash(a) == hash(b)


@pytest.mark.parametrize(
    "raw",
    [
        "not-a-uuid",
        "",
        "   ",
        "1234",
        "5f0d8b9e-3c1a-4a57-9d1e",
        "5f0d8b9e3c1a4a579d1e2b8f5c6a7e10",
        "{5f0d8b9e-3c1a-4a57-9d1e-2b8f5c6a7e10}",
        "urn:uuid:5f0d8b9e-3c1a-4a57-9d1e-2b8f5c6a7e10",
        " 5f0d8b9e-3c1a-4a57-9d1e-2b8f5c6a7e10 ",
        "5f0d8b9e-3c1a-4a57-9d1e-2b8f5c6a7e10\n",
    ],
)
def test_map_id_malformado(raw: str) -> None:
    with pytest.raises(MalformedUUIDError):
        MapId(raw)


def test_malformed_uuid_e_value_error() -> None:
    with pytest.raises(ValueError):
        MapId("not-a-uuid")


def test_map_id_generate_produz_ids_distintos() -> None:
    assert MapId.generate() != MapId.generate()


def test_options_padrao() -> None:
    options = MapOptions()
    assert (options.font_max_size, options.font_min_size, options.font_increment) == (70, 15, 5)


def test_options_min_maior_que_max_e_invalido() -> None:
    with pytest.raises(ValueError, match="font_min_size"):
        MapOptions(font_max_size=10, font_min_size=20)


def test_options_nao_positivas_sao_invalidas() -> None:
    with pytest.raises(ValueError):
        MapOptions(font_increment=0)


def test_options_from_dict_preenche_faltantes_com_padrao() -> None:
    options = MapOptions.from_dict({"font_max_size": 90})
    assert options == MapOptions(font_max_size=90)
    assert MapOptions.from_dict(None) == MapOptions()
