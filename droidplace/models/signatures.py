"""
Android signature catalog.

Immutable tables of the framework signals the signature detector looks for.
The catalog is passed into the detector so tests can supply synthetic
signatures.
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class AndroidSignatureCatalog(BaseModel):
    """Closed sets of Android framework signals."""

    base_types: tuple[str, ...] = Field(
        default=(
            "Activity",
            "AppCompatActivity",
            "ComponentActivity",
            "FragmentActivity",
            "Fragment",
            "DialogFragment",
            "Service",
            "BroadcastReceiver",
            "ContentProvider",
            "Application",
            "ViewModel",
            "AndroidViewModel",
            "RecyclerView.Adapter",
            "RecyclerView.ViewHolder",
        ),
        description="Framework and Jetpack supertypes",
    )
    annotations: tuple[str, ...] = Field(
        default=(
            "AndroidEntryPoint",
            "HiltAndroidApp",
            "HiltViewModel",
            "Composable",
            "Layout",
            "WorkerThread",
            "UiThread",
        ),
        description="Android annotation names, without '@'",
    )
    import_prefixes: tuple[str, ...] = Field(
        default=("android.", "androidx."),
        description="Package prefixes of Android imports",
    )
    lifecycle_methods: tuple[str, ...] = Field(
        default=("onCreate", "onStart", "onResume", "onPause", "onStop", "onDestroy"),
        description="Standard lifecycle callbacks",
    )

    model_config = {"frozen": True}


DEFAULT_SIGNATURES = AndroidSignatureCatalog()
