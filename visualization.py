"""
TSP Solver - Visualization Module
Plots of a tour and of the best length found per starting round.
"""

import matplotlib.pyplot as plt
from typing import List
from tsp_core import Tour


class TSPVisualizer:
    """Visualize TSP tours and search progress."""

    def __init__(self, figsize=(12, 8)):
        self.figsize = figsize

    def _finish(self, fig, save_path, show, label):
        plt.tight_layout()

        if save_path:
            fig.savefig(save_path, dpi=150, bbox_inches='tight')
            print(f"{label} saved to {save_path}")

        if show:
            plt.show()
        else:
            plt.close(fig)
        return fig

    def plot_tour(
        self,
        tour: Tour,
        title: str = "TSP Tour",
        show_arrows: bool = True,
        label_points: bool = None,
        save_path: str = None,
        show: bool = True
    ):
        """
        Plot a single tour.

        Args:
            tour: The tour to visualize
            title: Plot title
            show_arrows: Show direction arrows on edges
            label_points: Annotate identifiers (default: only for small tours)
            save_path: Optional path to save the figure
            show: Open an interactive window instead of closing the figure
        """
        fig, ax = plt.subplots(figsize=self.figsize)

        if len(tour) == 0:
            ax.text(0.5, 0.5, 'No points in tour',
                   ha='center', va='center', fontsize=16)
            return self._finish(fig, save_path, show, "Tour")

        x_coords = [p.x for p in tour.order]
        y_coords = [p.y for p in tour.order]

        # Close the loop
        x_coords.append(tour.order[0].x)
        y_coords.append(tour.order[0].y)

        size = 200 if len(tour) <= 50 else 10
        ax.scatter(x_coords[:-1], y_coords[:-1],
                  c='red', s=size, zorder=3, edgecolors='darkred', linewidth=1)
        ax.plot(x_coords, y_coords,
               'b-', linewidth=1.5, alpha=0.6, zorder=1)

        if label_points is None:
            label_points = len(tour) <= 50

        if label_points:
            for p in tour.order:
                ax.annotate(str(p.identifier), (p.x, p.y),
                           fontsize=8, ha='center', va='center',
                           color='white', weight='bold')

        if show_arrows and 1 < len(tour) <= 100:
            for i in range(len(tour)):
                start = tour.order[i]
                end = tour.order[(i + 1) % len(tour)]

                mid_x = (start.x + end.x) / 2
                mid_y = (start.y + end.y) / 2
                dx = end.x - start.x
                dy = end.y - start.y

                ax.annotate('',
                           xy=(mid_x + dx*0.1, mid_y + dy*0.1),
                           xytext=(mid_x - dx*0.1, mid_y - dy*0.1),
                           arrowprops=dict(arrowstyle='->',
                                         color='blue',
                                         lw=1.5,
                                         alpha=0.7))

        # Highlight start point
        first = tour.order[0]
        ax.scatter([first.x], [first.y],
                  c='green', s=300, zorder=4,
                  marker='*', edgecolors='darkgreen', linewidth=2)

        ax.set_title(f"{title}\nTotal Length: {tour.length}",
                    fontsize=14, weight='bold')
        ax.set_xlabel('X Coordinate', fontsize=12)
        ax.set_ylabel('Y Coordinate', fontsize=12)
        ax.grid(True, alpha=0.3)
        ax.set_aspect('equal')

        return self._finish(fig, save_path, show, "Tour")

    def plot_convergence(
        self,
        history: List[int],
        title: str = "Best Length per Starting Point",
        save_path: str = None,
        show: bool = True
    ):
        """Plot the best length found after each starting round."""
        fig, ax = plt.subplots(figsize=(10, 6))

        if not history:
            ax.text(0.5, 0.5, 'No rounds', ha='center', va='center', fontsize=16)
            return self._finish(fig, save_path, show, "Convergence plot")

        rounds = range(1, len(history) + 1)
        ax.step(rounds, history, 'b-', where='post', linewidth=2, label='Best Length')

        initial = history[0]
        final = history[-1]
        improvement = ((initial - final) / initial) * 100 if initial else 0.0

        ax.axhline(y=final, color='g', linestyle='--',
                  linewidth=1.5, label=f'Final: {final}')
        ax.axhline(y=initial, color='r', linestyle='--',
                  linewidth=1.5, label=f'First round: {initial}')

        ax.set_xlabel('Round', fontsize=12)
        ax.set_ylabel('Best Length', fontsize=12)
        ax.set_title(f"{title}\nImprovement: {improvement:.2f}%",
                    fontsize=14, weight='bold')
        ax.grid(True, alpha=0.3)
        ax.legend(loc='upper right', fontsize=10)

        return self._finish(fig, save_path, show, "Convergence plot")
