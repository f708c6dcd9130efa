from __future__ import annotations
import logging
from importlib.resources import files as ir_files
from pathlib import Path
from typing import Literal

from rna_loop_score.energies.data.yaml_io import read_yaml
from rna_loop_score.energies.data.parsers import (
    get_temperature_kelvin,
    parse_complements,
    validate_rna_complements,
    parse_multiloop,
    parse_loop_table,
    parse_stacks_matrix,
    parse_dangles,
    parse_mismatch,
    parse_special_hairpins,
)
from rna_loop_score.energies.energy_types import SecondaryStructureEnergies

logger = logging.getLogger(__name__)

Kind = Literal["RNA"]

DEFAULT_PARAMS_FILE = "turner1999_min.yaml"


def default_params_path() -> Path:
    """Path of the parameter file shipped with the package."""
    return Path(str(ir_files("rna_loop_score") / "data" / DEFAULT_PARAMS_FILE))


class SecondaryStructureEnergyLoader:
    """
    Loads and parses nearest-neighbour parameters from a YAML file into an
    immutable `SecondaryStructureEnergies` bundle.
    """
    def load(self, kind: Kind = "RNA", yaml_path: str | Path | None = None) -> SecondaryStructureEnergies:
        """
        Load the parameter bundle for a nucleic acid.

        Parameters
        ----------
        kind : {"RNA"}, optional
            Parameter set to load. Only "RNA" is supported.
        yaml_path : str | Path | None
            Parameter file.

        Returns
        -------
        SecondaryStructureEnergies
            Parsed tables, energies stored as `(ΔH [kcal/mol], ΔS [cal/(K·mol)])`.

        Raises
        ------
        ValueError
            If a `kind` other than "RNA" is requested or `yaml_path` is missing.
        """
        if kind.upper() != "RNA":
            raise ValueError("Only 'RNA' is supported for now.")

        return self._build_rna(yaml_path)

    def _build_rna(self, yaml_path: str | Path | None = None) -> SecondaryStructureEnergies:
        """
        Construct the RNA tables from a YAML file.

        References
        ----------
        1. Xia, T. et al. (1998). Thermodynamic parameters for an expanded nearest
          neighbor model for formation of RNA duplexes with Watson–Crick base pairs.
          Biochemistry, 37(42), 14719–14735.
        2. Mathews, D. H., Sabina, J., Zuker, M., & Turner, D. H. (1999). Expanded
          sequence dependence of thermodynamic parameters provides robust prediction
          of RNA secondary structure. J. Mol. Biol., 288(5), 911–940.
        """
        if yaml_path is None:
            raise ValueError("yaml_path is required.")

        data = read_yaml(yaml_path)
        temp_k = get_temperature_kelvin(data)

        complements = parse_complements(data)
        validate_rna_complements(complements)

        energies = SecondaryStructureEnergies(
            BULGE=parse_loop_table(data, ("bulge_loops", "bulge_loop"), temp_k),
            COMPLEMENT_BASES=complements,
            DANGLES=parse_dangles(data, temp_k),
            HAIRPIN=parse_loop_table(data, ("hairpin_loops", "hairpin_loop"), temp_k),
            MULTILOOP=parse_multiloop(data),
            INTERNAL=parse_loop_table(data, ("internal_loops", "internal_loop"), temp_k),
            NN_STACK=parse_stacks_matrix(data, temp_k),
            INTERNAL_MISMATCH=parse_mismatch(data, "internal_mismatches", temp_k),
            TERMINAL_MISMATCH=parse_mismatch(data, "terminal_mismatches", temp_k),
            HAIRPIN_MISMATCH=parse_mismatch(data, "hairpin_mismatches", temp_k),
            MULTI_MISMATCH=parse_mismatch(data, "multi_mismatch", temp_k),
            SPECIAL_HAIRPINS=parse_special_hairpins(data, temp_k),
        )
        logger.debug(
            f"Parsed {Path(yaml_path).name}: {len(energies.NN_STACK)} stacks, "
            f"{len(energies.HAIRPIN)} hairpin / {len(energies.BULGE)} bulge / "
            f"{len(energies.INTERNAL)} internal loop sizes"
        )

        return energies
