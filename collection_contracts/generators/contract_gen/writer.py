"""File writer for contract generation."""
from pathlib import Path
from typing import List, Sequence
from collection_contracts.generators.contract_gen.types import ContractDescriptor

CONTRACT_FILE_SUFFIX = ".jay-contract"


def write_contracts(descriptors: Sequence[ContractDescriptor], out_dir: Path) -> List[Path]:
    """
    Write each contract descriptor to ``<out_dir>/<name>.jay-contract``.

    Args:
        descriptors: Generated contract descriptors
        out_dir: Base output directory path

    Returns:
        Paths of the written files, in input order
    """
    out_dir.mkdir(parents=True, exist_ok=True)

    written = []
    for descriptor in descriptors:
        file_path = out_dir / f"{descriptor.name}{CONTRACT_FILE_SUFFIX}"
        file_path.write_text(descriptor.render() + "\n", encoding="utf-8")
        written.append(file_path)
    return written
