"""Binding generator: extracts declarations, resolves symbols, writes output."""

from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
import sys
from typing import Dict, List, Optional, Tuple, Union

from ffisymbols.config import GeneratorConfig
from ffisymbols.extractors import detect_extractor
from ffisymbols.ir import Declaration, DeclarationKind, DeclarationStore, ResolvedSymbol
from ffisymbols.resolution import NameMapper, create_name_mapper
from ffisymbols.rules import MarkerRuleEngine, create_default_engine
from ffisymbols.writers import JSONSymbolMapWriter, RubyFFIWriter


class Generator:
    """Generates a binding for the declarations found in the configured headers.

    The name mapper is consulted once per declaration; resolution order and
    output order follow the order in which declarations were extracted.
    """

    def __init__(
        self,
        config: GeneratorConfig,
        name_mapper: Optional[NameMapper] = None,
        rule_engine: Optional[MarkerRuleEngine] = None
    ) -> None:
        if not config.module_name:
            raise ValueError("No module name given.")
        if not config.ffi_lib:
            raise ValueError("No FFI library given.")
        if not config.headers:
            raise ValueError("No headers given.")

        self.config = config
        self.name_mapper = name_mapper or create_name_mapper(config.naming.policy, config.naming.prefix)
        self.rule_engine = rule_engine or create_default_engine(config.rule_files, config.blocking)

        self.skipped: List[Tuple[str, str]] = []
        self._store: Optional[DeclarationStore] = None

    def declarations(self) -> DeclarationStore:
        """Extract declarations from every header, applying marker rules."""
        if self._store is not None:
            return self._store

        store = DeclarationStore()
        for header in self.config.headers:
            path = Path(header)
            extractor = detect_extractor(path, self.config.export_macros)
            if extractor is None:
                print(f"Warning: No extractor for {path}, skipping", file=sys.stderr)
                continue
            store.add_declarations(self.rule_engine.apply_all(extractor.extract(path)))

        self._store = store
        return store

    def resolve_symbols(self) -> List[ResolvedSymbol]:
        """Resolve the native symbol of every declaration.

        Raises:
            InvalidOverrideError: If an override is malformed and the
                ``on_invalid_override`` policy is ``abort``
            ValueError: If a declaration name is not a valid symbol and the
                policy is ``abort``
        """
        declarations = self.declarations().declarations
        self.skipped = []

        workers = max(1, self.config.performance.parallel_workers)
        if workers > 1 and len(declarations) > 1:
            with ThreadPoolExecutor(max_workers=workers) as pool:
                # map() yields results in submission order
                outcomes = list(pool.map(self._resolve_one, declarations))
        else:
            outcomes = [self._resolve_one(declaration) for declaration in declarations]

        resolved = []
        for declaration, outcome in zip(declarations, outcomes):
            if isinstance(outcome, ValueError):
                if self.config.naming.on_invalid_override == "abort":
                    raise outcome
                print(f"Warning: Skipping {declaration.name}: {outcome}", file=sys.stderr)
                self.skipped.append((declaration.name, str(outcome)))
                continue
            resolved.append(ResolvedSymbol(declaration, outcome))

        self._warn_duplicates(resolved)
        return resolved

    def _resolve_one(self, declaration: Declaration) -> Union[str, ValueError]:
        if declaration.kind == DeclarationKind.CONSTANT:
            return declaration.name
        try:
            return self.name_mapper.resolve(declaration.name, declaration.markers)
        except ValueError as e:
            # includes InvalidOverrideError
            return e

    def _warn_duplicates(self, resolved: List[ResolvedSymbol]) -> None:
        seen: Dict[str, str] = {}
        for item in resolved:
            if item.declaration.kind != DeclarationKind.FUNCTION:
                continue
            previous = seen.setdefault(item.symbol, item.declaration.name)
            if previous != item.declaration.name:
                print(f"Warning: Symbol \"{item.symbol}\" is bound by both \"{previous}\" and \"{item.declaration.name}\"", file=sys.stderr)

    def render(self, symbols: Optional[List[ResolvedSymbol]] = None) -> str:
        """Render resolved symbols in the configured output format."""
        if symbols is None:
            symbols = self.resolve_symbols()

        if self.config.output_format == "json":
            return JSONSymbolMapWriter(self.config.module_name, self.config.ffi_lib).write(symbols, self.skipped)

        writer = RubyFFIWriter(
            self.config.module_name,
            self.config.ffi_lib,
            prefixes=self.config.prefixes,
            keyword_blacklist=self.config.keyword_blacklist,
            ffi_lib_flags=self.config.ffi_lib_flags
        )
        return writer.write(symbols)

    def generate(self) -> str:
        """Generate the binding, writing it to ``config.output`` when set."""
        code = self.render()
        if self.config.output:
            output_path = Path(self.config.output)
            output_path.parent.mkdir(parents=True, exist_ok=True)
            with open(output_path, "w") as f:
                f.write(code)
            print(f"ffi-symbols: {output_path}")
        return code


def generate(config: GeneratorConfig) -> str:
    """Generate a binding from a configuration."""
    return Generator(config).generate()
