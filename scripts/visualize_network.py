#!/usr/bin/env python3
"""
Utility script to visualize a saved champion network.

Usage:
    python scripts/visualize_network.py --network data/best_net.json
"""

import argparse
import sys

from evosnake import PersistenceError, load_network
from evosnake.agent.perception import EIGHT_DIRECTIONS
from evosnake.game import Direction
import graphviz


def input_labels():
    """
    Names of the 24 perception inputs, in order.
    """
    labels = []
    for dx, dy in EIGHT_DIRECTIONS:
        labels.append(f'solid\\n({dx:+d},{dy:+d})')
        labels.append(f'food\\n({dx:+d},{dy:+d})')
    labels += [f'head\\n{d.name}' for d in Direction]
    labels += [f'tail\\n{d.name}' for d in Direction]
    return labels


def visualize_network(network, output_file='network', format='png', view=True, min_weight=0.0):
    """
    Visualize a network as a layered graph.

    Args:
        network: The network to visualize
        output_file: Output filename (without extension)
        format: Output format (png, pdf, svg, etc.)
        view: Whether to automatically open the generated file
        min_weight: Connections with a smaller absolute weight are not drawn
    """
    dot = graphviz.Digraph(format=format, engine='dot')
    dot.attr(rankdir='LR')
    dot.attr('node', shape='circle')

    # Add input nodes
    labels = input_labels() if network.input_size == len(input_labels()) else None
    with dot.subgraph(name='layer_in') as sub:
        sub.attr(rank='same')
        for i in range(network.input_size):
            label = labels[i] if labels else f'In{i}'
            sub.node(f'in_{i}', label=label, color='green', style='filled')

    # Add layer nodes, labelled with their bias
    num_layers = len(network.layers)
    for l in range(num_layers):
        is_output = l == num_layers - 1
        with dot.subgraph(name=f'layer_{l}') as sub:
            sub.attr(rank='same')
            for k, bias in enumerate(network.get_bias(l)):
                name  = Direction(k).name if is_output else f'{l}.{k}'
                color = 'red' if is_output else 'lightblue'
                sub.node(f'n_{l}_{k}', label=f'{name}\\nb={bias:+.2f}', color=color, style='filled')

    # Add connections
    for l, layer in enumerate(network.layers):
        for k, weights in enumerate(layer.weights):
            for j, weight in enumerate(weights):
                if abs(weight) < min_weight:
                    continue
                source = f'in_{j}' if l == 0 else f'n_{l - 1}_{j}'
                color = 'blue' if weight > 0 else 'red'
                penwidth = str(min(abs(weight) * 2, 5))
                dot.edge(source, f'n_{l}_{k}', color=color, penwidth=penwidth)

    dot.render(output_file, view=view)
    print(f"Network visualization saved to {output_file}.{format}")


def main():
    parser = argparse.ArgumentParser(description='Visualize a saved champion network')
    parser.add_argument('--network', type=str, required=True,
                        help='Path to a saved network (JSON)')
    parser.add_argument('--output', type=str, default='network',
                        help='Output filename (without extension)')
    parser.add_argument('--format', type=str, default='png',
                        choices=['png', 'pdf', 'svg'],
                        help='Output format')
    parser.add_argument('--min-weight', type=float, default=0.0,
                        help='Hide connections with a smaller absolute weight')
    parser.add_argument('--no-view', action='store_true',
                        help='Do not automatically open the generated file')

    args = parser.parse_args()

    try:
        network = load_network(args.network)
    except PersistenceError as e:
        print(f"Error: {e}")
        sys.exit(1)

    visualize_network(network, args.output, args.format, not args.no_view, args.min_weight)


if __name__ == '__main__':
    main()
