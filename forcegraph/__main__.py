import json
import logging
import sys

from PyQt6.QtCore import QCoreApplication

from .graph_engine import GraphEngine
from .loaders import from_networkx
from .samples import sample_graph
from .ui.driver import LayoutDriver

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def main(argv=None):
    """Lay out the demo dataset headlessly and print the final positions as JSON."""
    app = QCoreApplication(argv if argv is not None else sys.argv)

    engine = GraphEngine()
    nodes, links = from_networkx(sample_graph())
    driver = LayoutDriver(engine, interval=0)
    driver.converged.connect(app.quit)

    engine.load(nodes, links)
    app.exec()

    snapshot = engine.snapshot()
    logger.info(f"Finished after {snapshot.tick} ticks (alpha={snapshot.alpha:.4f})")
    print(json.dumps({k: [round(x, 2), round(y, 2)] for k, (x, y) in snapshot.positions.items()}, indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
