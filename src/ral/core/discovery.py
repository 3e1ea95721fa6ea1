"""
Provider Discovery

Finds external providers on disk. A provider is an executable ``*.prov``
file; running it with ``ral_action=describe`` prints YAML metadata:

```yaml
provider:
  type: host
  invoke: json
  actions: [list, find, update]
  suitable: true
  attributes:
    name: {desc: "the host name"}
    ensure: {type: "enum[present, absent]"}
    ip: {type: string}
```

Only ``invoke: json`` providers are supported. Problems with one file are
logged and that file is skipped; discovery itself never fails.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Iterable
from pathlib import Path
from typing import Any

import yaml

from ral.domain import Ok, Result, error
from ral.providers.base.executor import ExecutionConfig, ProcessExecutor
from ral.providers.external import ExternalProvider
from ral.providers.external.protocol import ACTION_VARIABLE, DESCRIBE
from ral.providers.registry import ProviderRegistry

logger = logging.getLogger(__name__)

PROVIDER_SUFFIX = ".prov"
JSON_INVOKE = "json"


def provider_files(paths: Iterable[str | Path]) -> list[Path]:
    """Executable ``*.prov`` files in ``paths``, sorted per directory."""
    found: list[Path] = []
    for directory in paths:
        directory = Path(directory)
        if not directory.is_dir():
            logger.warning("provider directory %s does not exist", directory)
            continue
        for candidate in sorted(directory.iterdir()):
            if candidate.suffix != PROVIDER_SUFFIX or not candidate.is_file():
                continue
            if not os.access(candidate, os.X_OK):
                logger.warning("provider %s is not executable", candidate)
                continue
            found.append(candidate)
    return found


def read_metadata(
    path: Path,
    executor: ProcessExecutor,
    config: ExecutionConfig,
) -> Result[dict[str, Any]]:
    """Run the ``describe`` action and parse its YAML output."""
    outcome = executor.execute(
        path,
        args=[f"{ACTION_VARIABLE}={DESCRIBE}"],
        timeout=config.timeout_seconds,
        environment={ACTION_VARIABLE: DESCRIBE},
    )
    if outcome.is_err():
        return outcome
    result = outcome.unwrap()
    if not result.success:
        return error(
            f"action '{DESCRIBE}' exited with status {result.exit_code}"
            + (f". stderr was '{result.error}'" if result.error else "")
        )

    try:
        node = yaml.safe_load(result.output)
    except yaml.YAMLError as e:
        return error(f"invalid YAML metadata: {e}")
    if not isinstance(node, dict):
        return error("metadata must be a YAML map")
    return Ok(node)


def load_provider(
    path: Path,
    executor: ProcessExecutor,
    config: ExecutionConfig,
) -> Result[ExternalProvider]:
    """Describe and prepare the provider at ``path``."""
    metadata = read_metadata(path, executor, config)
    if metadata.is_err():
        return metadata
    node = metadata.unwrap()

    meta = node.get("provider")
    invoke = meta.get("invoke", JSON_INVOKE) if isinstance(meta, dict) else JSON_INVOKE
    if invoke != JSON_INVOKE:
        return error(f"unsupported invoke method '{invoke}'")

    provider = ExternalProvider(path, node, config=config, executor=executor)
    prepared = provider.prepare()
    if prepared.is_err():
        return prepared
    return Ok(provider)


def discover_providers(
    paths: Iterable[str | Path],
    config: ExecutionConfig | None = None,
    executor: ProcessExecutor | None = None,
    registry: ProviderRegistry | None = None,
) -> ProviderRegistry:
    """Load every provider found in ``paths`` into a registry."""
    config = config or ExecutionConfig()
    executor = executor or ProcessExecutor()
    registry = registry if registry is not None else ProviderRegistry()

    for path in provider_files(paths):
        loaded = load_provider(path, executor, config)
        if loaded.is_err():
            logger.warning("provider[%s]: skipped: %s", path, loaded.err().detail)
            continue
        provider = loaded.unwrap()
        if provider.name in registry.providers:
            logger.warning(
                "provider[%s]: skipped: name '%s' is already registered", path, provider.name
            )
            continue
        registry.register(provider)
    return registry
