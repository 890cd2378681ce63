import json

import pytest

from palletchain.cli.main import load_blocks, load_genesis, main


def transfer(caller, to, amount):
    return {"caller": caller,
            "call": {"pallet": "balances", "call": {"method": "transfer", "to": to, "amount": amount}}}


@pytest.fixture
def files(tmp_path):
    genesis = tmp_path / "genesis.json"
    genesis.write_text(json.dumps({"alloc": {"alice": 100}}))

    blocks = tmp_path / "blocks.json"
    blocks.write_text(json.dumps([
        {"header": {"block_number": 0}, "extrinsics": [transfer("alice", "bob", 30)]},
        {"header": {"block_number": 1}, "extrinsics": [transfer("bob", "charlie", 40)]},
    ]))
    return genesis, blocks


def run_cli(capsys, *argv):
    main(list(argv))
    return json.loads(capsys.readouterr().out)


def test_load_genesis_formats(tmp_path):
    wrapped = tmp_path / "a.json"
    wrapped.write_text(json.dumps({"alloc": {"alice": "5"}}))
    bare = tmp_path / "b.json"
    bare.write_text(json.dumps({"bob": 7}))

    assert load_genesis(str(wrapped)) == {"alice": 5}
    assert load_genesis(str(bare)) == {"bob": 7}


def test_load_blocks_accepts_wrapped_list(tmp_path):
    path = tmp_path / "blocks.json"
    path.write_text(json.dumps({"blocks": [{"header": {"block_number": 3}}]}))
    blocks = load_blocks(str(path))
    assert blocks[0].header.block_number == 3
    assert blocks[0].extrinsics == []


def test_run_with_bump(files, capsys):
    genesis, blocks = files
    out = run_cli(capsys, "run", "--genesis", str(genesis), "--blocks", str(blocks),
                  "--runtime", "devnet", "--bump")

    assert len(out["receipts"]) == 2
    assert out["receipts"][1]["extrinsics"][0]["status"] == "failed"
    state = out["state"]
    assert state["balances"] == {"alice": 70, "bob": 30}
    assert state["nonces"] == {"alice": 1, "bob": 1}
    assert state["block_number"] == 2


def test_run_auto_advancing_runtime(files, capsys):
    genesis, blocks = files
    out = run_cli(capsys, "run", "--genesis", str(genesis), "--blocks", str(blocks),
                  "--runtime", "testnet")
    assert out["state"]["block_number"] == 2
    assert out["state"]["runtime_id"] == "testnet"


def test_run_without_bump_stops_at_rejected_block(files, capsys):
    genesis, blocks = files
    with pytest.raises(SystemExit) as exc:
        main(["run", "--genesis", str(genesis), "--blocks", str(blocks), "--runtime", "devnet"])
    assert exc.value.code == 1

    out = capsys.readouterr().out
    assert "does not match system block number" in out
    payload = json.loads(out[out.index("{"):])
    assert len(payload["receipts"]) == 1
    assert payload["state"]["balances"] == {"alice": 70, "bob": 30}


def test_run_invalid_blocks_file(tmp_path, capsys):
    path = tmp_path / "blocks.json"
    path.write_text(json.dumps([{"header": {"block_number": "x"}}]))
    with pytest.raises(SystemExit):
        main(["run", "--blocks", str(path), "--runtime", "devnet"])
    assert "invalid blocks file" in capsys.readouterr().out


def test_config_command(capsys):
    out = run_cli(capsys, "config")
    assert [c["runtime_id"] for c in out] == ["devnet", "testnet"]

    with pytest.raises(SystemExit):
        main(["config", "--runtime", "missing"])


@pytest.mark.parametrize("content", [
    json.dumps({"alloc": {"alice": -1}}),
    json.dumps({"alloc": {"alice": 2**200}}),
    json.dumps([["alice", 100]]),
    json.dumps({"alloc": {"alice": "lots"}}),
    "{not json",
])
def test_run_invalid_genesis_file(tmp_path, capsys, content):
    genesis = tmp_path / "genesis.json"
    genesis.write_text(content)
    blocks = tmp_path / "blocks.json"
    blocks.write_text("[]")

    with pytest.raises(SystemExit) as exc:
        main(["run", "--genesis", str(genesis), "--blocks", str(blocks), "--runtime", "devnet"])
    assert exc.value.code == 1
    assert "invalid genesis file" in capsys.readouterr().out


def test_run_missing_genesis_file(tmp_path, capsys):
    blocks = tmp_path / "blocks.json"
    blocks.write_text("[]")
    with pytest.raises(SystemExit):
        main(["run", "--genesis", str(tmp_path / "absent.json"), "--blocks", str(blocks)])
    assert "invalid genesis file" in capsys.readouterr().out
