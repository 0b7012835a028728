# ==============================================
# Tests for the generative classifiers and kNN
# ==============================================

import numpy as np
import pytest
from scipy.stats import multivariate_normal, norm

from statlab.experiments.datasets import heights_xy, simulate_heights, simulate_mnist_27
from statlab.models import LDA, QDA, GaussianNaiveBayes, KNNClassifier
from statlab.models.models_registry import get_factory_and_grid


@pytest.fixture
def heights():
    return heights_xy(simulate_heights(n=600, random_state=3))


@pytest.fixture
def mnist27():
    return simulate_mnist_27(n=600, random_state=5)


class TestNaiveBayes:
    def test_univariate_posterior_matches_formula(self, heights):
        X, y = heights
        nb = GaussianNaiveBayes().fit(X, y)
        female, male = X[y == "Female", 0], X[y == "Male", 0]
        pi = np.mean(y == "Female")
        x = np.array([[60.0], [66.0], [72.0]])
        f1 = norm.pdf(x[:, 0], female.mean(), female.std(ddof=1))
        f0 = norm.pdf(x[:, 0], male.mean(), male.std(ddof=1))
        expected = f1 * pi / (f1 * pi + f0 * (1 - pi))

        proba = nb.predict_proba(x)
        female_col = list(nb.classes_).index("Female")
        np.testing.assert_allclose(proba[:, female_col], expected, rtol=1e-9)
        np.testing.assert_allclose(proba.sum(axis=1), 1.0)

    def test_prior_override_without_refit(self, heights):
        X, y = heights
        nb = GaussianNaiveBayes().fit(X, y)
        means = nb.means_.copy()
        empirical = nb.predict(X) == "Female"
        balanced = nb.predict(X, priors={"Female": 0.5, "Male": 0.5}) == "Female"
        # a larger female prior can only add female predictions
        assert balanced.sum() > empirical.sum()
        assert np.all(balanced[empirical])
        np.testing.assert_array_equal(nb.means_, means)
        np.testing.assert_allclose(nb.priors_, nb.class_freq_)

    def test_set_priors(self, heights):
        X, y = heights
        nb = GaussianNaiveBayes().fit(X, y)
        means = nb.means_.copy()
        empirical = nb.predict(X)
        nb.set_priors({"Female": 0.5, "Male": 0.5})
        assert np.sum(nb.predict(X) == "Female") > np.sum(empirical == "Female")
        np.testing.assert_array_equal(nb.means_, means)
        female_col = list(nb.classes_).index("Female")
        assert nb.priors_[female_col] == pytest.approx(0.5)

        nb.set_priors(None)
        np.testing.assert_allclose(nb.priors_, nb.class_freq_)
        np.testing.assert_array_equal(nb.predict(X), empirical)

    def test_set_priors_requires_fit(self):
        with pytest.raises(ValueError):
            GaussianNaiveBayes().set_priors([0.5, 0.5])

    def test_priors_at_construction(self, heights):
        X, y = heights
        a = GaussianNaiveBayes(priors=[0.5, 0.5]).fit(X, y).predict_proba(X)
        b = GaussianNaiveBayes().fit(X, y).predict_proba(X, priors=[0.5, 0.5])
        np.testing.assert_allclose(a, b)

    @pytest.mark.parametrize("priors", [[0.2, 0.2], [1.2, -0.2], [1.0], {"Female": 1.0}])
    def test_invalid_priors(self, heights, priors):
        X, y = heights
        nb = GaussianNaiveBayes().fit(X, y)
        with pytest.raises(ValueError):
            nb.predict(X, priors=priors)

    def test_zero_prior_never_predicted(self, heights):
        X, y = heights
        nb = GaussianNaiveBayes().fit(X, y)
        assert set(nb.predict(X, priors={"Female": 0.0, "Male": 1.0})) == {"Male"}

    def test_fit_errors(self):
        with pytest.raises(ValueError):
            GaussianNaiveBayes().fit([[1.0], [2.0], [3.0]], ["a", "a", "b"])
        with pytest.raises(ValueError):
            GaussianNaiveBayes().fit([[1.0], [2.0]], ["a", "a"])
        with pytest.raises(ValueError):
            GaussianNaiveBayes().predict([[1.0]])


class TestQDAandLDA:
    def test_qda_density_matches_scipy(self, mnist27):
        X, y = mnist27
        qda = QDA().fit(X, y)
        k = list(qda.classes_).index(7)
        X7 = X[y == 7]
        expected = multivariate_normal(X7.mean(axis=0), np.cov(X7, rowvar=False)).logpdf(X[:5])
        np.testing.assert_allclose(qda._log_density(X[:5])[:, k], expected)

    def test_lda_pooled_covariance(self, mnist27):
        X, y = mnist27
        lda = LDA().fit(X, y)
        pooled = sum((np.sum(y == c) - 1) * np.cov(X[y == c], rowvar=False) for c in (2, 7)) / (len(y) - 2)
        np.testing.assert_allclose(lda.covariance_, pooled)

    def test_lda_boundary_is_linear(self, mnist27):
        X, y = mnist27
        lda = LDA().fit(X, y)
        # with a shared covariance the log posterior odds are affine in x
        grid = np.array([[0.1, 0.1], [0.3, 0.1], [0.1, 0.3], [0.3, 0.3]])
        lp = lda.predict_log_proba(grid)
        logit = lp[:, 1] - lp[:, 0]
        assert logit[3] - logit[2] == pytest.approx(logit[1] - logit[0])

    @pytest.mark.parametrize("model", [GaussianNaiveBayes, QDA, LDA])
    def test_accuracy_on_digits(self, mnist27, model):
        X, y = mnist27
        est = model().fit(X[:400], y[:400])
        assert np.mean(est.predict(X[400:]) == y[400:]) > 0.7

    def test_singular_covariance(self):
        rng = np.random.default_rng(0)
        x = rng.normal(size=(30, 1))
        X = np.hstack([x, 2 * x])
        y = np.array([0, 1] * 15)
        with pytest.raises(np.linalg.LinAlgError):
            QDA().fit(X, y).predict(X)
        assert QDA(reg=1e-3).fit(X, y).predict(X).shape == (30,)

    def test_negative_reg(self):
        with pytest.raises(ValueError):
            LDA(reg=-1.0)

    def test_feature_count_checked(self, mnist27):
        X, y = mnist27
        with pytest.raises(ValueError):
            QDA().fit(X, y).predict(X[:, :1])


class TestKNN:
    def test_fit_predict(self, mnist27):
        X, y = mnist27
        knn = KNNClassifier(k=15).fit(X[:400], y[:400])
        assert np.mean(knn.predict(X[400:]) == y[400:]) > 0.7
        assert knn.predict_proba(X[:3]).shape == (3, 2)

    def test_k_larger_than_data(self):
        with pytest.raises(ValueError):
            KNNClassifier(k=10).fit(np.zeros((5, 1)), [0, 1, 0, 1, 0])

    def test_unfitted(self):
        with pytest.raises(ValueError):
            KNNClassifier().predict([[0.0]])


class TestRegistry:
    @pytest.mark.parametrize("name", ["nb", "qda", "lda", "knn"])
    def test_factories(self, name, mnist27):
        X, y = mnist27
        factory, grid = get_factory_and_grid(name)
        est = factory(grid[0]).fit(X, y)
        assert est.predict(X[:4]).shape == (4,)

    def test_knn_grid(self):
        assert len(get_factory_and_grid("knn", fast=False)[1]) > len(get_factory_and_grid("knn", fast=True)[1])

    def test_unknown(self):
        with pytest.raises(ValueError):
            get_factory_and_grid("svm")
