import pandas as pd

from tabreport.const import RendererKind
from tabreport.data import Artifact, ArtifactFormat
from tabreport.renderers.base import AbstractRenderer


class TableRenderer(AbstractRenderer):
    """Render the rows of each category as an HTML table."""

    name = str(RendererKind.TABLE)

    def render(self, label: str, rows: pd.DataFrame) -> Artifact:
        """Render the category rows, limited to the x/y columns when configured."""
        columns = [column for column in (self.config.x, self.config.y) if column is not None]
        self._require(rows, *columns)
        view = rows[columns] if columns else rows

        content = view.to_html(index=False, border=0, classes="dataframe", na_rep="")
        return Artifact(label=label, format=ArtifactFormat.HTML, content=content, row_count=len(rows))
