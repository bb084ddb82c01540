import networkx as nx

from loadplan.domain.errors import CyclicDependencyError, MissingReferenceError


def build_dependency_graph(tasks):
    """
    Build a directed graph representing task dependencies.

    Edges point from a predecessor to the task that waits for it.

    Args:
        tasks: Iterable of Task objects

    Returns:
        networkx.DiGraph: Graph with one node per task ID

    Raises:
        MissingReferenceError: If a predecessor ID is not one of the tasks
        CyclicDependencyError: If the dependencies contain a cycle
    """
    G = nx.DiGraph()

    # Add task nodes
    for task in tasks:
        G.add_node(task.id, task=task)

    # Add task dependencies (edges)
    for task in tasks:
        for pred_id in task.predecessors:
            if pred_id not in G:
                raise MissingReferenceError(
                    f"Task {task.id} depends on unknown task {pred_id}"
                )
            G.add_edge(pred_id, task.id)

    # Check for cycles
    if not nx.is_directed_acyclic_graph(G):
        cycle = [edge[0] for edge in nx.find_cycle(G)]
        raise CyclicDependencyError(cycle)

    return G


def task_order(graph):
    """Return task IDs so that every task comes after all of its predecessors."""
    return list(nx.topological_sort(graph))
