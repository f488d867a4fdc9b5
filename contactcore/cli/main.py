"""Command-line interface for contact duplicate and network analysis."""

import sys
import json
import argparse
from pathlib import Path
from typing import Any, List, Optional

from pydantic import ValidationError as PydanticValidationError
from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from ..config import ConfigManager, EngineConfig
from ..engine import ContactAnalysisEngine
from ..error_handling import ContactCoreError, ValidationError
from ..logging_config import get_logger, setup_logging
from ..models import Contact
from ..network import NetworkData, filter_network
from ..network.layout import layout_bounds

logger = get_logger(__name__)

console = Console()
error_console = Console(stderr=True)


def load_contacts(path: str) -> List[Contact]:
    """Load a contact snapshot from a JSON file.

    The file holds either a list of contacts or an object with a
    ``contacts`` list.

    Raises:
        ValidationError: If the file is missing, unreadable or malformed
    """
    file_path = Path(path)
    if not file_path.exists():
        raise ValidationError(f"Contact file not found: {path}", field_name="file", field_value=path)

    try:
        with open(file_path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise ValidationError(f"Contact file is not valid JSON: {e}", field_name="file") from e
    except (OSError, UnicodeDecodeError) as e:
        raise ValidationError(
            f"Cannot read contact file {path}: {e}", field_name="file", field_value=path
        ) from e

    if isinstance(data, dict):
        data = data.get("contacts")
    if not isinstance(data, list):
        raise ValidationError(
            "Contact file must hold a list of contacts or an object with a 'contacts' list",
            field_name="contacts",
        )

    contacts = []
    for index, record in enumerate(data):
        try:
            contacts.append(Contact.model_validate(record))
        except PydanticValidationError as e:
            first = e.errors()[0]
            field = ".".join(str(part) for part in first["loc"]) or "contact"
            raise ValidationError(
                f"Contact #{index} is invalid: {field}: {first['msg']}",
                field_name=field,
                field_value=first.get("input"),
                context={"index": index},
            ) from e

    logger.info(f"Loaded {len(contacts)} contacts from {path}")
    return contacts


def _print_json(payload: Any) -> None:
    print(json.dumps(payload, indent=2, default=str))


def _require_contact(network: NetworkData, contact_id: str) -> None:
    if network.node(contact_id) is None:
        raise ValidationError(
            f"Unknown contact id: {contact_id}", field_name="contact_id", field_value=contact_id
        )


def find_duplicates(args, engine: ContactAnalysisEngine) -> int:
    """Report duplicate groups with a merge proposal for each."""
    contacts = load_contacts(args.file)
    result = engine.find_duplicates(contacts, args.threshold)
    proposals = [engine.propose_merge(group) for group in result.groups]

    if args.json:
        _print_json({
            "total_contacts": result.total_contacts,
            "total_duplicates": result.total_duplicates,
            "threshold": result.threshold,
            "comparisons": result.comparisons,
            "groups": [
                {
                    "id": group.id,
                    "similarity": group.similarity,
                    "reasons": group.reasons,
                    "contact_ids": group.contact_ids,
                    "merged": proposal.merged.model_dump(mode="json"),
                    "conflicting_fields": proposal.conflicting_fields,
                }
                for group, proposal in zip(result.groups, proposals)
            ],
        })
        return 0

    console.print(Panel(
        f"[bold]{len(result.groups)}[/bold] duplicate groups covering "
        f"[bold]{result.total_duplicates}[/bold] of {result.total_contacts} contacts "
        f"(threshold {result.threshold:.0%})",
        title="🔍 Duplicate Detection",
        border_style="cyan",
    ))

    for group, proposal in zip(result.groups, proposals):
        table = Table(
            title=f"{group.id} - {group.similarity:.0%} similar",
            box=box.SIMPLE_HEAD,
            show_header=True,
            header_style="bold",
        )
        table.add_column("ID", style="cyan")
        table.add_column("Name")
        table.add_column("Company")
        table.add_column("Email")
        table.add_column("Phone")
        for contact in group.contacts:
            table.add_row(
                contact.id,
                contact.name,
                contact.company or "[dim]—[/dim]",
                contact.email or "[dim]—[/dim]",
                contact.phone or "[dim]—[/dim]",
            )
        console.print(table)
        console.print(f"   Reasons: {', '.join(group.reasons) or 'none'}")
        if proposal.has_conflicts:
            console.print(f"   [yellow]⚠️  Conflicting fields: {', '.join(proposal.conflicting_fields)}[/yellow]")

    return 0


def show_network(args, engine: ContactAnalysisEngine) -> int:
    """Report network metrics, clusters and relationships."""
    contacts = load_contacts(args.file)
    network = engine.analyze_network(contacts)

    # JSON output is the full network; --min-strength only trims the table
    if args.json:
        _print_json(network.to_dict())
        return 0

    min_strength = (
        args.min_strength if args.min_strength is not None
        else engine.config.network.min_edge_strength
    )
    nodes, edges = filter_network(network.nodes, network.relationships, min_strength)

    metrics = network.metrics
    summary = Table(title="📊 Network Metrics", box=box.ROUNDED, show_header=False)
    summary.add_column("Metric", style="cyan")
    summary.add_column("Value", justify="right")
    summary.add_row("Contacts", str(metrics.total_contacts))
    summary.add_row("Relationships", str(metrics.total_relationships))
    summary.add_row("Average connections", f"{metrics.average_connections:.2f}")
    summary.add_row("Density", f"{metrics.network_density:.3f}")
    summary.add_row("Largest cluster", str(metrics.largest_cluster))
    summary.add_row("Isolated contacts", str(metrics.isolated_contacts))
    summary.add_row("Connected components", str(metrics.connected_components))
    summary.add_row(
        "Clusters (company/job/crew)",
        f"{metrics.company_clusters}/{metrics.job_clusters}/{metrics.crew_clusters}",
    )
    console.print(summary)

    if network.clusters:
        clusters = Table(title="Clusters", box=box.SIMPLE_HEAD, header_style="bold")
        clusters.add_column("Cluster")
        clusters.add_column("Type", style="cyan")
        clusters.add_column("Members", justify="right")
        for cluster in network.clusters:
            clusters.add_row(
                f"[{cluster.color}]■[/{cluster.color}] {cluster.name}",
                cluster.type.value,
                str(cluster.strength),
            )
        console.print(clusters)

    relationships = Table(
        title=f"Relationships (strength ≥ {min_strength:g})", box=box.SIMPLE_HEAD, header_style="bold"
    )
    relationships.add_column("Source")
    relationships.add_column("Target")
    relationships.add_column("Strength", justify="right")
    relationships.add_column("Type", style="cyan")
    for edge in sorted(edges, key=lambda e: e.strength, reverse=True):
        relationships.add_row(edge.source, edge.target, f"{edge.strength:g}", edge.relationship_type.value)
    console.print(relationships)
    console.print(f"   Showing {len(nodes)} of {len(network.nodes)} contacts")
    return 0


def show_path(args, engine: ContactAnalysisEngine) -> int:
    """Show the shortest relationship chain between two contacts."""
    contacts = load_contacts(args.file)
    network = engine.analyze_network(contacts)
    _require_contact(network, args.from_id)
    _require_contact(network, args.to_id)

    path = engine.find_path(network, args.from_id, args.to_id)
    hops = engine.pathfinder.path_contacts(args.from_id, path)

    if args.json:
        _print_json({
            "from": args.from_id,
            "to": args.to_id,
            "hops": len(path),
            "contacts": hops if path else [],
            "path": [edge.to_dict() for edge in path],
        })
        return 0

    if not path:
        console.print(f"[yellow]No path between {args.from_id} and {args.to_id}[/yellow]")
        return 0

    names = [network.node(contact_id).name for contact_id in hops]
    console.print(f"🔗 {' → '.join(names)} ({len(path)} hops)")
    for edge in path:
        console.print(f"   {edge.source} - {edge.target}: {'; '.join(edge.details)}")
    return 0


def show_influencers(args, engine: ContactAnalysisEngine) -> int:
    """List the strongly connected neighbors of a contact."""
    contacts = load_contacts(args.file)
    network = engine.analyze_network(contacts)
    _require_contact(network, args.contact_id)

    influencers = engine.get_influencers(network, args.contact_id)

    if args.json:
        _print_json([node.to_dict() for node in influencers])
        return 0

    table = Table(title=f"Influencers of {args.contact_id}", box=box.SIMPLE_HEAD, header_style="bold")
    table.add_column("ID", style="cyan")
    table.add_column("Name")
    table.add_column("Company")
    table.add_column("Connections", justify="right")
    table.add_column("Centrality", justify="right")
    for node in influencers:
        table.add_row(
            node.id, node.name, node.company, str(node.connection_count), f"{node.centrality_score:g}"
        )
    console.print(table)
    return 0


def show_layout(args, engine: ContactAnalysisEngine) -> int:
    """Compute force-directed positions for the filtered network."""
    contacts = load_contacts(args.file)
    network = engine.analyze_network(contacts)
    positions = engine.layout_network(
        network,
        width=args.width,
        height=args.height,
        min_strength=args.min_strength,
        search_query=args.search,
    )

    if args.json:
        _print_json({cid: {"x": p.x, "y": p.y} for cid, p in positions.items()})
        return 0

    table = Table(title="📍 Layout", box=box.SIMPLE_HEAD, header_style="bold")
    table.add_column("ID", style="cyan")
    table.add_column("X", justify="right")
    table.add_column("Y", justify="right")
    for contact_id, pos in positions.items():
        table.add_row(contact_id, f"{pos.x:.1f}", f"{pos.y:.1f}")
    console.print(table)

    min_x, min_y, max_x, max_y = layout_bounds(positions)
    console.print(f"   Bounds: ({min_x:.1f}, {min_y:.1f}) - ({max_x:.1f}, {max_y:.1f})")
    return 0


def generate_config(args) -> int:
    """Write or print a configuration template."""
    config_manager = ConfigManager()

    if args.output:
        config_manager.save_template(args.output)
        console.print(f"✅ Configuration template saved to: {args.output}")
    else:
        _print_json(ConfigManager.DEFAULT_CONFIG)
    return 0


COMMANDS = {
    "duplicates": find_duplicates,
    "network": show_network,
    "path": show_path,
    "influencers": show_influencers,
    "layout": show_layout,
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="contactcore",
        description="Contact duplicate detection and relationship network analysis",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Find duplicates at a stricter threshold
  contactcore duplicates contacts.json --threshold 0.9

  # Network metrics and clusters as JSON
  contactcore --json network contacts.json

  # Shortest relationship chain between two contacts
  contactcore path contacts.json c-1 c-7

  # Layout of the contacts matching a search
  contactcore layout contacts.json --search halliburton
""",
    )
    parser.add_argument("-c", "--config", help="Path to configuration file")
    parser.add_argument("--log-level", help="Logging level (overrides configuration)")
    parser.add_argument("--json", action="store_true", help="Print machine-readable JSON")

    subparsers = parser.add_subparsers(dest="command", help="Commands")

    dup_parser = subparsers.add_parser("duplicates", help="Find duplicate contacts")
    dup_parser.add_argument("file", help="Contact JSON file")
    dup_parser.add_argument("-t", "--threshold", type=float, help="Similarity threshold (0-1]")

    net_parser = subparsers.add_parser("network", help="Analyze the relationship network")
    net_parser.add_argument("file", help="Contact JSON file")
    net_parser.add_argument("--min-strength", type=float, help="Minimum relationship strength shown in the table")

    path_parser = subparsers.add_parser("path", help="Find the path between two contacts")
    path_parser.add_argument("file", help="Contact JSON file")
    path_parser.add_argument("from_id", help="Starting contact id")
    path_parser.add_argument("to_id", help="Target contact id")

    inf_parser = subparsers.add_parser("influencers", help="List a contact's influencers")
    inf_parser.add_argument("file", help="Contact JSON file")
    inf_parser.add_argument("contact_id", help="Contact id")

    layout_parser = subparsers.add_parser("layout", help="Compute a force-directed layout")
    layout_parser.add_argument("file", help="Contact JSON file")
    layout_parser.add_argument("--width", type=float, help="Canvas width")
    layout_parser.add_argument("--height", type=float, help="Canvas height")
    layout_parser.add_argument("--min-strength", type=float, help="Minimum relationship strength")
    layout_parser.add_argument("--search", help="Only lay out contacts matching this text")

    config_parser = subparsers.add_parser("generate-config", help="Generate configuration template")
    config_parser.add_argument("-o", "--output", help="Save to file (default: print to stdout)")

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    try:
        if args.command == "generate-config":
            return generate_config(args)

        config: EngineConfig = ConfigManager(args.config).load()
        setup_logging(format=config.log_format, level=args.log_level or config.log_level)

        engine = ContactAnalysisEngine(config)
        return COMMANDS[args.command](args, engine)
    except ContactCoreError as e:
        error_console.print(f"[red]❌ Error: {e}[/red]")
        return 1
    except KeyboardInterrupt:
        error_console.print("\n⚠️  Interrupted by user")
        return 1


if __name__ == "__main__":
    sys.exit(main())
