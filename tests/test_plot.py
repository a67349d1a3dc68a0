import matplotlib


matplotlib.use("Agg")

import matplotlib.pyplot as plt  # noqa: E402

from radaucol import TranscriptionSettings, create_transcription  # noqa: E402
from radaucol.plot import plot_transcription_grid  # noqa: E402


class TestGridPlot:
    def test_plot_returns_figure_with_two_axes(self):
        scheme = create_transcription(TranscriptionSettings(mesh=[0.0, 0.3, 1.0], degree=3))

        fig = plot_transcription_grid(scheme)
        try:
            assert len(fig.axes) == 2
            assert "7 grid points" in fig.axes[0].get_title()
        finally:
            plt.close(fig)
