# helpers/logger.py
import numpy as np
import csv, json, datetime, pathlib
import matplotlib

matplotlib.use("Agg")
import matplotlib.pyplot as plt


class RunLogger:
    def __init__(self, root="runs", tag="run"):
        ts = datetime.datetime.now().strftime("%Y%m%d-%H%M%S")
        self.root = pathlib.Path(root)
        self.dir = self.root / f"{tag}_{ts}"
        self.dir.mkdir(parents=True, exist_ok=True)
        self.csv_path = self.dir / "history.csv"
        self.json_path = self.dir / "history.json"
        self.best_ckpt = self.dir / "checkpoint_best.npz"
        self.last_ckpt = self.dir / "checkpoint_last.npz"
        self.metrics = []  # list of dicts per epoch
        self._csv_header_written = False

    # ---------- logging ----------
    def log_epoch(self, epoch, **kwargs):
        row = {"epoch": int(epoch), **{k: float(v) for k, v in kwargs.items()}}
        self.metrics.append(row)
        with open(self.csv_path, "a", newline="") as f:
            writer = csv.DictWriter(f, fieldnames=list(row.keys()))
            if not self._csv_header_written:
                writer.writeheader()
                self._csv_header_written = True
            writer.writerow(row)

    def save_json(self):
        with open(self.json_path, "w") as f:
            json.dump(self.metrics, f, indent=2)

    def save_checkpoint(self, params, best=False):
        # params: one blob per layer, stored as p1..pm like Network.save
        path = self.best_ckpt if best else self.last_ckpt
        np.savez(path, **{f"p{i}": p for i, p in enumerate(params, start=1)})
        return str(path)

    # ---------- plotting ----------
    def plot_loss(self, history, tag="run", subdir="plots"):
        """
        Saves loss curve as loss_curve_<tag>_epochs_<n>.png.
        history: {'loss': [...], 'val_loss': [...]} (val_loss optional)
        """
        train = history.get("loss", [])
        val = history.get("val_loss", [])

        outdir = self.dir / subdir
        outdir.mkdir(parents=True, exist_ok=True)
        total_epochs = max(len(train), len(val))
        plt.figure()
        if len(train) > 0:
            plt.plot(train, label="train loss")
        if len(val) > 0:
            plt.plot(val, label="val loss")
        plt.xlabel("Epoch")
        plt.ylabel("Loss")
        plt.title(f"Loss vs Epochs ({tag})")
        if len(train) > 0 or len(val) > 0:
            plt.legend()
        plt.tight_layout()
        path = outdir / f"loss_curve_{tag}_epochs_{total_epochs}.png"
        plt.savefig(path, dpi=160)
        plt.close()
        return str(path)
