import struct

import pytest

from lpntools.executor import (
    EXPORT_FILE,
    IMAGE_SIZE,
    Machine,
    MemoryImageError,
    Opcode,
    main,
)


def _image(cells):
    words = [0] * 258
    for address, value in cells.items():
        words[address + 2] = value
    return struct.pack("<258H", *words)


def _machine(cells):
    return Machine.from_bytes(_image(cells))


def test_trailing_bytes_are_ignored():
    data = _image({0: Opcode.HLT})
    assert Machine.from_bytes(data + b"extra").to_bytes() == data


def test_short_image_is_rejected():
    with pytest.raises(MemoryImageError):
        Machine.from_bytes(b"\x00" * (IMAGE_SIZE - 1))


def test_add_program_stores_sum():
    machine = _machine({
        0: Opcode.LDA, 1: 128,
        2: Opcode.ADD, 3: 129,
        4: Opcode.STA, 5: 130,
        6: Opcode.HLT,
        128: 5, 129: 7,
    }).run()
    assert machine.memory[130 + 2] == 12
    assert not machine.n and not machine.z
    assert machine.pc == 6


def test_not_sets_negative_flag():
    machine = _machine({0: Opcode.LDA, 1: 128, 2: Opcode.NOT, 3: Opcode.HLT})
    machine.step()
    assert machine.z and not machine.n
    machine.step()
    assert machine.ac == -1
    assert machine.n and not machine.z


def test_store_of_negative_accumulator_sign_extends():
    machine = _machine({
        0: Opcode.LDA, 1: 128,
        2: Opcode.NOT,
        3: Opcode.STA, 4: 129,
        5: Opcode.HLT,
    }).run()
    assert machine.memory[129 + 2] == 0xFFFF


def test_jz_taken_when_zero():
    machine = _machine({
        0: Opcode.LDA, 1: 128,
        2: Opcode.JZ, 3: 10,
        10: Opcode.HLT,
    }).run()
    assert machine.pc == 10


def test_jn_not_taken_when_positive():
    machine = _machine({
        0: Opcode.LDA, 1: 128,
        2: Opcode.JN, 3: 50,
        4: Opcode.HLT,
        128: 1,
    }).run()
    assert machine.pc == 4


def test_unknown_opcode_stops_machine():
    machine = _machine({0: Opcode.NOP, 1: 7}).run()
    assert machine.unknown_opcode == 7
    assert machine.pc == 1


def test_operand_outside_memory_raises():
    with pytest.raises(MemoryImageError):
        _machine({0: Opcode.LDA, 1: 300}).run()


def test_report_lists_every_address():
    machine = _machine({0: Opcode.HLT, 5: 42}).run()
    lines = machine.report().splitlines()
    memory_lines = [line for line in lines if line.startswith("[")]
    assert len(memory_lines) == 256
    assert memory_lines[5].split() == ["[", "5]", "42"]
    assert lines[1] == "|  PC  |  AC  |  N  |  Z  |"


def test_main_requires_one_argument(capsys):
    assert main([]) == 1
    assert capsys.readouterr().out == "Quantidade de parâmetros inválida"


def test_main_missing_file(tmp_path, capsys):
    assert main([str(tmp_path / "missing.mem")]) == 1
    assert "Não foi encontrado" in capsys.readouterr().out


def test_main_exports_final_memory(tmp_path, monkeypatch, capsys):
    image = _image({
        0: Opcode.LDA, 1: 128,
        2: Opcode.ADD, 3: 129,
        4: Opcode.STA, 5: 130,
        6: Opcode.HLT,
        128: 3, 129: 4,
    })
    source = tmp_path / "program.mem"
    source.write_bytes(image)
    monkeypatch.chdir(tmp_path)
    assert main([str(source)]) == 0
    expected = Machine.from_bytes(image).run()
    assert (tmp_path / EXPORT_FILE).read_bytes() == expected.to_bytes()
    assert capsys.readouterr().out == expected.report()